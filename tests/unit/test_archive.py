from datetime import UTC, datetime
import io
import zipfile

import pytest

from scaffold_api.archive import archive_slug, build_project_archive, build_zip
from scaffold_api.errors import ProjectNotReadyError
from scaffold_api.schemas import GeneratedFile, Project, ProjectFeatures, ProjectStatus, Stack

FILES = [
    GeneratedFile(path="frontend/src/App.tsx", content="export default App;\n", language="tsx"),
    GeneratedFile(path="README.md", content="# Shop ✅\n", language="markdown"),
]


def make_project(status=ProjectStatus.COMPLETED, files=FILES, name="Shop"):
    now = datetime(2024, 1, 1, tzinfo=UTC)
    return Project(
        id="p1",
        name=name,
        description="An online store",
        stack=Stack.REACT_NODE,
        features=ProjectFeatures(auth=False, crud=False, payments=False, database=False, api=False),
        status=status,
        created_at=now,
        updated_at=now,
        files=files,
    )


@pytest.mark.parametrize(
    ("name", "slug"),
    [
        ("Shop", "shop"),
        ("My Cool App", "my-cool-app"),
        ("  Bob's \"Shop\"!! ", "bob-s-shop"),
        ("!!!", "project"),
    ],
)
def test_archive_slug(name, slug):
    assert archive_slug(name) == slug


def test_archive_contains_every_file_under_root():
    filename, payload = build_project_archive(make_project(name="My Shop"))

    assert filename == "my-shop.zip"
    with zipfile.ZipFile(io.BytesIO(payload)) as archive:
        assert archive.testzip() is None
        assert archive.namelist() == ["my-shop/frontend/src/App.tsx", "my-shop/README.md"]
        assert archive.read("my-shop/README.md").decode("utf-8") == "# Shop ✅\n"
        info = archive.getinfo("my-shop/README.md")
        assert info.date_time == (1980, 1, 1, 0, 0, 0)
        assert info.external_attr >> 16 == 0o100644


def test_archive_is_deterministic():
    assert build_zip("shop", FILES) == build_zip("shop", list(FILES))


@pytest.mark.parametrize(
    "status", [ProjectStatus.PENDING, ProjectStatus.GENERATING, ProjectStatus.FAILED]
)
def test_unfinished_project_is_not_archived(status):
    with pytest.raises(ProjectNotReadyError) as exc_info:
        build_project_archive(make_project(status=status, files=None))

    assert exc_info.value.status == status.value
