"""Template generator: project selection -> ordered file descriptors."""

from scaffold_api.schemas import GeneratedFile, Project

# Importing the provider modules registers them.
from . import features as _features  # noqa: F401
from . import stacks as _stacks
from .registry import (
    get_feature_provider,
    get_stack_provider,
    registered_features,
    registered_stacks,
)
from .tree import FileNode, build_file_tree


def generate_files(project: Project) -> list[GeneratedFile]:
    """Generate the scaffold for a project.

    Output order: base files, stack-specific files, then feature files in
    feature declaration order. Identical input yields identical output.

    Raises:
        UnknownStackError: If the project's stack has no registered provider.
    """
    stack_provider = get_stack_provider(project.stack)

    files = _stacks.base_files(project)
    files.extend(stack_provider(project))
    for feature in project.features.enabled():
        provider = get_feature_provider(feature)
        if provider is not None:
            files.extend(provider(project))
    return files


__all__ = [
    "FileNode",
    "build_file_tree",
    "generate_files",
    "registered_features",
    "registered_stacks",
]
