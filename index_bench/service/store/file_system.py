import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from index_bench.util.log_config import setup_logger

logger = setup_logger(__name__)


class FileSystem(ABC):
    """Filesystem operations the table transformer relies on."""

    @abstractmethod
    def delete(self, path: str, recursive: bool = True) -> None:
        """Delete path; a missing path is not an error."""
        pass

    @abstractmethod
    def copy(self, src_path: str, dst_path: str, delete_source: bool = False) -> None:
        """Copy a file or directory tree, removing the source afterwards if asked."""
        pass


class LocalFileSystem(FileSystem):

    def delete(self, path: str, recursive: bool = True) -> None:
        target = Path(path)
        if not (target.exists() or target.is_symlink()):
            logger.debug(f"Nothing to delete at {target}")
            return

        if target.is_file() or target.is_symlink():
            target.unlink()
        elif recursive:
            shutil.rmtree(target)
        else:
            target.rmdir()
        logger.debug(f"Deleted {target}")

    def copy(self, src_path: str, dst_path: str, delete_source: bool = False) -> None:
        src = Path(src_path)
        dst = Path(dst_path)
        if not src.exists():
            raise FileNotFoundError(f"Copy source does not exist: {src}")

        if src.is_dir():
            shutil.copytree(src, dst, dirs_exist_ok=True)
        else:
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dst)
        logger.debug(f"Copied {src} -> {dst}")

        if delete_source:
            self.delete(str(src), recursive=True)
