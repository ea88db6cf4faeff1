"""Environment endpoints, nested under a project."""

from .base import BaseClient, build_body, segment
from .models import Environment, EnvironmentRequest


class EnvironmentsController:
    def __init__(self, base: BaseClient):
        self.base = base

    @staticmethod
    def _path(project_id: str, environment_id: str | None = None) -> str:
        path = f"/projects/{segment(project_id)}/environments"
        if environment_id is not None:
            path += f"/{segment(environment_id)}"
        return path

    def create(self, project_id: str, name: str, description: str | None = None) -> Environment:
        body = build_body(EnvironmentRequest, name=name, description=description)
        response = self.base.request("POST", self._path(project_id), body)
        return self.base.decode(response, Environment)

    def list(self, project_id: str) -> list[Environment]:
        response = self.base.request("GET", self._path(project_id))
        return self.base.decode(response, list[Environment])

    def get(self, project_id: str, environment_id: str) -> Environment:
        response = self.base.request("GET", self._path(project_id, environment_id))
        return self.base.decode(response, Environment)

    def update(
        self, project_id: str, environment_id: str, name: str, description: str | None = None
    ) -> Environment:
        body = build_body(EnvironmentRequest, name=name, description=description)
        response = self.base.request("PUT", self._path(project_id, environment_id), body)
        return self.base.decode(response, Environment)

    def delete(self, project_id: str, environment_id: str):
        response = self.base.request("DELETE", self._path(project_id, environment_id))
        self.base.expect_deleted(response)
