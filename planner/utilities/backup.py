"""
Backup utility for planner data files.
Creates timestamped copies of the namespace JSON files.
"""
import shutil
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional
import logging

from planner.utilities.constants import BACKUPS_TO_KEEP

logger = logging.getLogger(__name__)


class BackupManager:
    """Manages backups of data files."""

    def __init__(self, data_dir: Path, backup_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir)
        self.backup_dir = Path(backup_dir) if backup_dir else (self.data_dir / 'backups')
        self.backup_dir.mkdir(parents=True, exist_ok=True)

    def create_backup(self, filename: str) -> bool:
        """Create a timestamped backup of a data file."""
        source = self.data_dir / filename
        if not source.exists():
            logger.warning(f"File not found for backup: {filename}")
            return False
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_name = f"{source.stem}__{timestamp}{source.suffix}"
        try:
            shutil.copy2(source, self.backup_dir / backup_name)
        except OSError as e:
            logger.error(f"Backup failed for {filename}: {e}")
            return False
        logger.info(f"Backup created: {backup_name}")
        self._cleanup_old_backups(source.name)
        return True

    def _backups_for(self, filename: str) -> List[Path]:
        pattern = f"{Path(filename).stem}__*{Path(filename).suffix}"
        # timestamps sort lexically in creation order
        return sorted(self.backup_dir.glob(pattern), key=lambda p: p.name)

    def _cleanup_old_backups(self, filename: str, keep: int = BACKUPS_TO_KEEP):
        """Remove old backups, keeping only the most recent ones."""
        for backup in self._backups_for(filename)[:-keep]:
            try:
                backup.unlink()
                logger.info(f"Removed old backup: {backup.name}")
            except OSError as e:
                logger.error(f"Failed to remove old backup {backup.name}: {e}")

    @staticmethod
    def original_name(backup_filename: str) -> str:
        stem, _, rest = backup_filename.partition('__')
        return stem + Path(rest).suffix

    def restore_backup(self, backup_filename: str) -> bool:
        """Restore a specific backup file over its data file."""
        backup_path = self.backup_dir / backup_filename
        if Path(backup_filename).name != backup_filename or '__' not in backup_filename or not backup_path.exists():
            logger.error(f"Backup not found: {backup_filename}")
            return False
        destination = self.data_dir / self.original_name(backup_filename)
        try:
            content = backup_path.read_bytes()
            # Keep the current file before overwriting it
            if destination.exists():
                self.create_backup(destination.name)
            destination.write_bytes(content)
        except OSError as e:
            logger.error(f"Restore failed for {backup_filename}: {e}")
            return False
        logger.info(f"Restored backup: {backup_filename} -> {destination.name}")
        return True

    def list_backups(self, filename: Optional[str] = None) -> List[Dict]:
        """List all backups (newest first) or only those of one file."""
        if filename:
            backups = self._backups_for(filename)
        else:
            backups = sorted(self.backup_dir.glob('*__*.json'), key=lambda p: p.name)
        backups = sorted(backups, key=lambda p: p.name.partition('__')[2], reverse=True)
        return [
            {
                'name': b.name,
                'size': b.stat().st_size,
                'created': datetime.fromtimestamp(b.stat().st_mtime).strftime('%Y-%m-%d %H:%M:%S')
            }
            for b in backups
        ]

    def backup_all(self, filenames: Optional[List[str]] = None) -> Dict[str, bool]:
        """Back up the given files, or every JSON file in the data directory."""
        names = filenames if filenames is not None else [f.name for f in sorted(self.data_dir.glob('*.json'))]
        return {name: self.create_backup(name) for name in names}
