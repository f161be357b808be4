from datetime import UTC, datetime
import itertools
import json

import pytest

from scaffold_api.errors import UnknownStackError
from scaffold_api.generator import generate_files, registered_stacks
from scaffold_api.generator.registry import get_stack_provider
from scaffold_api.schemas import Project, ProjectFeatures, ProjectStatus, Stack

FEATURES = ("auth", "crud", "payments", "database", "api")
ALL_COMBINATIONS = [
    dict(zip(FEATURES, values, strict=True))
    for values in itertools.product([False, True], repeat=len(FEATURES))
]


def make_project(stack=Stack.REACT_NODE, name="Shop", description="An online store", **flags):
    features = {feature: flags.get(feature, False) for feature in FEATURES}
    now = datetime(2024, 1, 1, tzinfo=UTC)
    return Project(
        id="p1",
        name=name,
        description=description,
        stack=stack,
        features=ProjectFeatures(**features),
        status=ProjectStatus.GENERATING,
        created_at=now,
        updated_at=now,
    )


def paths(files):
    return [f.path for f in files]


def content(files, path):
    return next(f.content for f in files if f.path == path)


BASE_PATHS = [
    "frontend/package.json",
    "frontend/src/App.tsx",
    "frontend/src/App.css",
    "frontend/src/main.tsx",
    "frontend/src/index.css",
    "frontend/src/components/Home.tsx",
    "frontend/index.html",
    "backend/package.json",
    "backend/server.js",
    "README.md",
]


class TestDeterminism:
    @pytest.mark.parametrize("stack", list(Stack))
    def test_identical_input_identical_output(self, stack):
        for combination in ALL_COMBINATIONS:
            first = generate_files(make_project(stack, **combination))
            second = generate_files(make_project(stack, **combination))
            assert [f.model_dump() for f in first] == [f.model_dump() for f in second]

    def test_every_stack_has_a_provider(self):
        assert set(registered_stacks()) == set(Stack)


class TestAdditivity:
    @pytest.mark.parametrize("stack", list(Stack))
    def test_enabling_a_feature_never_removes_files(self, stack):
        for combination in ALL_COMBINATIONS:
            before = set(paths(generate_files(make_project(stack, **combination))))
            for feature in FEATURES:
                if combination[feature]:
                    continue
                enabled = {**combination, feature: True}
                after = set(paths(generate_files(make_project(stack, **enabled))))
                assert before <= after, f"{stack.value} +{feature} dropped {before - after}"


class TestFileSet:
    def test_base_files_without_features(self):
        files = generate_files(make_project())
        assert paths(files) == BASE_PATHS

    def test_shop_scenario(self):
        files = generate_files(
            make_project(auth=True, crud=True, payments=True, database=True, api=False)
        )

        assert paths(files) == BASE_PATHS + [
            "backend/routes/auth.js",
            "frontend/src/components/Login.tsx",
            "backend/routes/api.js",
            "frontend/src/components/Dashboard.tsx",
            "backend/models/index.js",
        ]

    def test_api_flag_adds_no_route_file(self):
        files = generate_files(make_project(api=True))
        assert paths(files) == BASE_PATHS

    def test_react_express_matches_react_node_layout(self):
        express = generate_files(make_project(Stack.REACT_EXPRESS, auth=True))
        node = generate_files(make_project(Stack.REACT_NODE, auth=True))
        assert paths(express) == paths(node)

    def test_next_node_adds_next_config(self):
        files = generate_files(make_project(Stack.NEXT_NODE))
        assert paths(files) == BASE_PATHS + ["frontend/next.config.js"]

    def test_language_tags(self):
        files = generate_files(make_project(Stack.NEXT_NODE, auth=True, database=True))
        languages = {f.path: f.language for f in files}

        assert languages["frontend/package.json"] == "json"
        assert languages["frontend/src/App.tsx"] == "tsx"
        assert languages["frontend/src/App.css"] == "css"
        assert languages["frontend/index.html"] == "html"
        assert languages["backend/server.js"] == "javascript"
        assert languages["README.md"] == "markdown"
        assert languages["frontend/next.config.js"] == "javascript"
        assert languages["backend/models/index.js"] == "javascript"


class TestCrossFeatureCoupling:
    def test_app_imports_follow_features(self):
        files = generate_files(make_project(auth=True))
        app = content(files, "frontend/src/App.tsx")

        assert "import Login from './components/Login';" in app
        assert "path='/login'" in app
        assert "Dashboard" not in app

    def test_app_without_features_has_only_home(self):
        app = content(generate_files(make_project()), "frontend/src/App.tsx")

        assert "Login" not in app
        assert "Dashboard" not in app
        assert "<Route path='/' element={<Home />} />" in app

    def test_server_mounts_follow_features(self):
        files = generate_files(make_project(crud=True))
        server = content(files, "backend/server.js")

        assert "import apiRoutes from './routes/api.js';" in server
        assert "app.use('/api', apiRoutes);" in server
        assert "authRoutes" not in server

    def test_manifests_follow_features(self):
        files = generate_files(make_project(auth=True, payments=True, database=True))
        frontend = json.loads(content(files, "frontend/package.json"))
        backend = json.loads(content(files, "backend/package.json"))

        assert "@auth0/auth0-react" in frontend["dependencies"]
        assert "@stripe/stripe-js" in frontend["dependencies"]
        assert {"jsonwebtoken", "bcryptjs", "mongoose", "stripe"} <= set(backend["dependencies"])

    def test_manifests_without_features(self):
        files = generate_files(make_project())
        backend = json.loads(content(files, "backend/package.json"))

        assert set(backend["dependencies"]) == {"express", "cors", "dotenv", "helmet", "morgan"}

    def test_readme_lists_every_feature(self):
        readme = content(generate_files(make_project(auth=True)), "README.md")

        assert readme.startswith("# Shop\n")
        assert "- ✅ Authentication" in readme
        assert "- ❌ CRUD Operations" in readme
        assert "- ❌ API" in readme


class TestNames:
    def test_package_names(self):
        files = generate_files(make_project(name="My  Cool\tApp"))

        assert json.loads(content(files, "frontend/package.json"))["name"] == "my-cool-app"
        backend = json.loads(content(files, "backend/package.json"))
        assert backend["name"] == "my-cool-app-backend"

    def test_name_is_safe_inside_source(self):
        name = "Bob's \"Shop\" <beta>"
        home = content(generate_files(make_project(name=name)), "frontend/src/components/Home.tsx")

        line = next(line for line in home.splitlines() if line.startswith("const title = "))
        assert json.loads(line.removeprefix("const title = ").rstrip(";")) == name


class TestUnknownStack:
    def test_unknown_stack_value(self):
        with pytest.raises(UnknownStackError) as exc_info:
            get_stack_provider("vue-django")

        assert isinstance(exc_info.value, ValueError)
        assert "react-node" in exc_info.value.available

    def test_generate_rejects_unknown_stack(self):
        project = make_project().model_copy(update={"stack": "vue-django"})

        with pytest.raises(UnknownStackError):
            generate_files(project)
