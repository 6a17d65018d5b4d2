"""ASGI entrypoint for the nutrient estimator API."""

from nutrient_estimator.api.app import create_app
from nutrient_estimator.containers import build_container

app = create_app(build_container())
