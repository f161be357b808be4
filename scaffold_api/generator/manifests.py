"""package.json manifests for the generated frontend and backend."""

import json
from typing import Any

from scaffold_api.schemas import Project

from .renderer import package_name

FRONTEND_DEPENDENCIES = {
    "react": "^18.2.0",
    "react-dom": "^18.2.0",
    "react-router-dom": "^6.20.0",
}

FRONTEND_DEV_DEPENDENCIES = {
    "@types/react": "^18.2.43",
    "@types/react-dom": "^18.2.17",
    "@typescript-eslint/eslint-plugin": "^6.14.0",
    "@typescript-eslint/parser": "^6.14.0",
    "@vitejs/plugin-react": "^4.2.1",
    "autoprefixer": "^10.4.16",
    "eslint": "^8.55.0",
    "eslint-plugin-react-hooks": "^4.6.0",
    "eslint-plugin-react-refresh": "^0.4.5",
    "postcss": "^8.4.32",
    "tailwindcss": "^3.4.0",
    "typescript": "^5.2.2",
    "vite": "^5.0.8",
}

BACKEND_DEPENDENCIES = {
    "express": "^4.18.2",
    "cors": "^2.8.5",
    "dotenv": "^16.3.1",
    "helmet": "^7.1.0",
    "morgan": "^1.10.0",
}


def _dump(manifest: dict[str, Any]) -> str:
    return json.dumps(manifest, indent=2) + "\n"


def frontend_package_json(project: Project) -> str:
    features = project.features
    dependencies = dict(FRONTEND_DEPENDENCIES)
    if features.auth:
        dependencies["@auth0/auth0-react"] = "^2.2.0"
    if features.payments:
        dependencies["@stripe/stripe-js"] = "^2.2.0"
        dependencies["@stripe/react-stripe-js"] = "^2.4.0"

    return _dump(
        {
            "name": package_name(project.name),
            "private": True,
            "version": "0.0.0",
            "type": "module",
            "scripts": {
                "dev": "vite",
                "build": "tsc && vite build",
                "lint": "eslint . --ext ts,tsx --report-unused-disable-directives --max-warnings 0",
                "preview": "vite preview",
            },
            "dependencies": dependencies,
            "devDependencies": dict(FRONTEND_DEV_DEPENDENCIES),
        }
    )


def backend_package_json(project: Project) -> str:
    features = project.features
    dependencies = dict(BACKEND_DEPENDENCIES)
    if features.auth:
        dependencies["jsonwebtoken"] = "^9.0.2"
        dependencies["bcryptjs"] = "^2.4.3"
    if features.database:
        dependencies["mongoose"] = "^8.0.0"
    if features.payments:
        dependencies["stripe"] = "^14.0.0"

    return _dump(
        {
            "name": f"{package_name(project.name)}-backend",
            "version": "1.0.0",
            "type": "module",
            "scripts": {"start": "node server.js", "dev": "nodemon server.js"},
            "dependencies": dependencies,
            "devDependencies": {"nodemon": "^3.0.2"},
        }
    )
