"""Stack and feature registries.

Every stack shares one base file set. A stack provider only contributes the
files that differ from that base; a feature provider contributes the files of
one feature flag. Providers are pure functions of the project.
"""

from collections.abc import Callable

from scaffold_api.errors import UnknownStackError
from scaffold_api.schemas import GeneratedFile, Project, Stack

FileProvider = Callable[[Project], list[GeneratedFile]]

_STACK_REGISTRY: dict[Stack, FileProvider] = {}
_FEATURE_REGISTRY: dict[str, FileProvider] = {}


def register_stack(*stacks: Stack):
    """Decorator registering a provider for one or more stacks.

    Usage:
        @register_stack(Stack.REACT_NODE, Stack.REACT_EXPRESS)
        def react_node_files(project): ...
    """

    def decorator(provider: FileProvider) -> FileProvider:
        for stack in stacks:
            _STACK_REGISTRY[stack] = provider
        return provider

    return decorator


def register_feature(name: str):
    """Decorator registering the files contributed by a feature flag."""

    def decorator(provider: FileProvider) -> FileProvider:
        _FEATURE_REGISTRY[name] = provider
        return provider

    return decorator


def get_stack_provider(stack: Stack | str) -> FileProvider:
    """Get the provider of stack-specific files.

    Raises:
        UnknownStackError: If the stack is not a known value or has no provider.
    """
    available = [s.value for s in _STACK_REGISTRY]
    try:
        key = Stack(stack)
    except ValueError:
        raise UnknownStackError(stack, available) from None
    if key not in _STACK_REGISTRY:
        raise UnknownStackError(stack, available)
    return _STACK_REGISTRY[key]


def get_feature_provider(name: str) -> FileProvider | None:
    """Provider for a feature, or None if the feature adds no files."""
    return _FEATURE_REGISTRY.get(name)


def registered_stacks() -> list[Stack]:
    return list(_STACK_REGISTRY)


def registered_features() -> list[str]:
    return list(_FEATURE_REGISTRY)
