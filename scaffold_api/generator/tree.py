"""Directory view over flat generated file paths."""

from dataclasses import dataclass, field

from scaffold_api.schemas import GeneratedFile


@dataclass
class FileNode:
    name: str
    path: str
    language: str | None = None
    children: list["FileNode"] = field(default_factory=list)

    @property
    def is_dir(self) -> bool:
        return self.language is None


def _sort(nodes: list[FileNode]) -> list[FileNode]:
    nodes.sort(key=lambda n: (not n.is_dir, n.name))
    for node in nodes:
        _sort(node.children)
    return nodes


def build_file_tree(files: list[GeneratedFile]) -> list[FileNode]:
    """Nest files under their directories.

    Directories come before files at each level, each group sorted by name.
    """
    roots: list[FileNode] = []
    dirs: dict[str, FileNode] = {}

    for file in files:
        parts = file.path.split("/")
        siblings = roots
        for depth, part in enumerate(parts[:-1]):
            dir_path = "/".join(parts[: depth + 1])
            node = dirs.get(dir_path)
            if node is None:
                node = FileNode(name=part, path=dir_path)
                dirs[dir_path] = node
                siblings.append(node)
            siblings = node.children
        siblings.append(FileNode(name=parts[-1], path=file.path, language=file.language))

    return _sort(roots)
