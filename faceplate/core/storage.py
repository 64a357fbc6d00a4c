import json
from pathlib import Path

from .models import ProjectSnapshot


def load_snapshot(path: str | Path) -> ProjectSnapshot:
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    return ProjectSnapshot.from_dict(data)


def save_snapshot(path: str | Path, data: dict) -> None:
    path = Path(path)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
