from pathlib import Path
from planner.utilities.config import DATA_DIR


def namespace_file(data_dir: Path, namespace: str) -> Path:
    """Each storage namespace is one JSON document: <data_dir>/<namespace>.json"""
    return Path(data_dir) / f'{namespace}.json'


__all__ = ['DATA_DIR', 'namespace_file']
