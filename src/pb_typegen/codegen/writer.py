from __future__ import annotations

from pathlib import Path
import subprocess


def write_typescript_file(
    target_path: Path,
    content: str,
    format_with_prettier: bool = False,
) -> Path:
    target_path.parent.mkdir(parents=True, exist_ok=True)
    target_path.write_text(content, encoding="utf-8")

    if format_with_prettier:
        subprocess.run(
            ["npx", "prettier", "--write", str(target_path)],
            check=False,
        )

    return target_path
