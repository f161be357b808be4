"""Files contributed by feature flags.

``payments`` and ``api`` have no files of their own: payments only adds
dependencies to the manifests, and the API routes come from ``crud``.
"""

from scaffold_api.schemas import GeneratedFile, Project

from .registry import register_feature
from .stacks import render_file


@register_feature("auth")
def auth_files(project: Project) -> list[GeneratedFile]:
    return [
        render_file("backend/routes/auth.js", "backend/auth.js.j2", "javascript", project),
        render_file(
            "frontend/src/components/Login.tsx", "frontend/Login.tsx.j2", "tsx", project
        ),
    ]


@register_feature("crud")
def crud_files(project: Project) -> list[GeneratedFile]:
    return [
        render_file("backend/routes/api.js", "backend/api.js.j2", "javascript", project),
        render_file(
            "frontend/src/components/Dashboard.tsx",
            "frontend/Dashboard.tsx.j2",
            "tsx",
            project,
        ),
    ]


@register_feature("database")
def database_files(project: Project) -> list[GeneratedFile]:
    return [
        render_file("backend/models/index.js", "backend/models.js.j2", "javascript", project),
    ]
