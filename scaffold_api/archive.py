"""ZIP archives of generated projects.

Archives are deterministic: entries follow the project's file order and carry
a fixed timestamp and permissions, so identical projects give identical bytes.
"""

import io
import re
import zipfile

from .errors import ProjectNotReadyError
from .schemas import GeneratedFile, Project, ProjectStatus

# Earliest timestamp the ZIP format can represent.
_FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_FILE_MODE = 0o100644


def archive_slug(name: str) -> str:
    """Filesystem- and header-safe name for the archive and its root folder."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "project"


def build_zip(root: str, files: list[GeneratedFile]) -> bytes:
    """Pack files under ``root/`` into a ZIP and return its bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for file in files:
            info = zipfile.ZipInfo(f"{root}/{file.path.lstrip('/')}", date_time=_FIXED_DATE_TIME)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = _FILE_MODE << 16
            archive.writestr(info, file.content.encode("utf-8"))
    return buffer.getvalue()


def build_project_archive(project: Project) -> tuple[str, bytes]:
    """Archive a completed project.

    Returns:
        ``(filename, zip_bytes)``

    Raises:
        ProjectNotReadyError: If the project is not completed.
    """
    if project.status != ProjectStatus.COMPLETED or project.files is None:
        raise ProjectNotReadyError(project.id, ProjectStatus(project.status).value)
    slug = archive_slug(project.name)
    return f"{slug}.zip", build_zip(slug, project.files)
