# src/lalparser/common/exporter.py
import json
import csv
import logging
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Any

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("json", "csv", "md", "txt")
TITLE_KEYS = ["display_name", "login", "comment"]


class DataExporter:
    """Report exporter for decoded LAL documents (json, csv, md, txt)."""

    def __init__(self, banner: str = ""):
        self.banner = banner.strip() if banner else ""
        self.timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')

    def export(self, data: Dict[str, List[Dict[str, Any]]], output_path: Path, fmt: str):
        """
        Writes data to output_path in the given format.

        :param data: Table name -> list of rows, e.g. {"logins": [...], "comments": [...]}.
        :param output_path: Target file (for csv, a directory of one file per table).
        :param fmt: One of json, csv, md, txt.
        :raises ValueError: if fmt is not supported.
        """
        fmt = fmt.lower()
        if fmt not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported export format: {fmt!r} (expected one of {', '.join(SUPPORTED_FORMATS)})")

        if not data:
            return

        output_path = Path(output_path)
        if fmt == "json": self._to_json(data, output_path)
        elif fmt == "csv": self._to_csv(data, output_path)
        elif fmt == "md": self._to_markdown(data, output_path)
        elif fmt == "txt": self._to_text(data, output_path)

        logger.info(f"Exported {sum(len(rows) for rows in data.values())} rows as {fmt} to {output_path}")

    def _to_json(self, data: Dict, path: Path):
        meta = {"metadata": {"generated_at": self.timestamp, "format": "lal"}}
        path.write_text(json.dumps({**meta, **data}, indent=4, ensure_ascii=False), encoding='utf-8')

    def _to_csv(self, data: Dict, path: Path):
        # A file-like target becomes a sibling folder holding one CSV per table
        export_dir = path if not path.suffix else path.parent / f"{path.stem}_export"
        export_dir.mkdir(parents=True, exist_ok=True)

        for table_name, rows in data.items():
            if not rows: continue
            file_path = export_dir / f"{table_name}.csv"
            # Keep first-seen column order so login/password lead the table
            headers = list(dict.fromkeys(k for row in rows for k in row.keys()))
            with open(file_path, "w", newline="", encoding="utf-8-sig") as f:
                writer = csv.DictWriter(f, fieldnames=headers)
                writer.writeheader()
                writer.writerows(rows)

    def _to_markdown(self, data: Dict, path: Path):
        lines = [f"```\n{self.banner}\n```\n" if self.banner else "# LAL Credential Report"]
        lines.append(f"> **Export Time**: `{self.timestamp}`\n")

        for table_name, rows in data.items():
            lines.append(f"\n## {table_name.upper()} ({len(rows)} items)")
            for i, entry in enumerate(rows, 1):
                title = self._get_title(entry)
                lines.append(f"\n### {i}. {title}")
                for k, v in entry.items():
                    # The heading already shows the title field; False/None are noise
                    if v is None or v is False or v == "" or (k in TITLE_KEYS and str(v) == title):
                        continue

                    label = k.replace('_', ' ').title()
                    if "password" in k.lower():
                        lines.append(f"- **{label}**: 🔐 `{v}`")
                    else:
                        lines.append(f"- **{label}**: {v}")
                lines.append("\n---")
        path.write_text("\n".join(lines), encoding='utf-8')

    def _to_text(self, data: Dict, path: Path):
        lines = [self.banner if self.banner else "LAL CREDENTIAL REPORT"]
        lines.append(f"Export Time: {self.timestamp}\n" + "="*40)
        for table_name, rows in data.items():
            lines.append(f"\n[{table_name.upper()}]")
            for entry in rows:
                lines.append("-" * 30)
                for k, v in entry.items():
                    label = k.replace('_', ' ').title()
                    lines.append(f"{label:<18}: {'' if v is None else v}")
        path.write_text("\n".join(lines), encoding='utf-8')

    def _get_title(self, entry: Dict) -> str:
        for key in TITLE_KEYS:
            if entry.get(key): return str(entry[key])
        return "Unnamed Record"
