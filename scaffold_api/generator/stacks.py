"""Base file set and stack-specific additions."""

from typing import Any

from scaffold_api.schemas import GeneratedFile, Project, Stack

from .manifests import backend_package_json, frontend_package_json
from .registry import register_stack
from .renderer import get_renderer


def template_context(project: Project) -> dict[str, Any]:
    """Variables available to every template."""
    return {
        "name": project.name,
        "description": project.description,
        "stack": Stack(project.stack).value,
        "features": project.features.model_dump(),
    }


def render_file(path: str, template: str, language: str, project: Project) -> GeneratedFile:
    content = get_renderer().render(template, template_context(project))
    return GeneratedFile(path=path, content=content, language=language)


def base_files(project: Project) -> list[GeneratedFile]:
    """Files every stack starts from. Imports in App.tsx and server.js follow
    the enabled features."""
    return [
        GeneratedFile(
            path="frontend/package.json",
            content=frontend_package_json(project),
            language="json",
        ),
        render_file("frontend/src/App.tsx", "frontend/App.tsx.j2", "tsx", project),
        render_file("frontend/src/App.css", "frontend/App.css.j2", "css", project),
        render_file("frontend/src/main.tsx", "frontend/main.tsx.j2", "tsx", project),
        render_file("frontend/src/index.css", "frontend/index.css.j2", "css", project),
        render_file(
            "frontend/src/components/Home.tsx", "frontend/Home.tsx.j2", "tsx", project
        ),
        render_file("frontend/index.html", "frontend/index.html.j2", "html", project),
        GeneratedFile(
            path="backend/package.json",
            content=backend_package_json(project),
            language="json",
        ),
        render_file("backend/server.js", "backend/server.js.j2", "javascript", project),
        render_file("README.md", "README.md.j2", "markdown", project),
    ]


@register_stack(Stack.REACT_NODE, Stack.REACT_EXPRESS)
def react_node_files(project: Project) -> list[GeneratedFile]:
    # The base set is already a React + Express project.
    return []


@register_stack(Stack.NEXT_NODE)
def next_node_files(project: Project) -> list[GeneratedFile]:
    return [
        render_file(
            "frontend/next.config.js", "frontend/next.config.js.j2", "javascript", project
        ),
    ]
