"""Environment variable endpoints, nested under a project environment."""

from .base import BaseClient, build_body, segment
from .models import Variable, VariableRequest


class VariablesController:
    def __init__(self, base: BaseClient):
        self.base = base

    @staticmethod
    def _path(project_id: str, environment_id: str, variable_id: str | None = None) -> str:
        path = f"/projects/{segment(project_id)}/environments/{segment(environment_id)}/variables"
        if variable_id is not None:
            path += f"/{segment(variable_id)}"
        return path

    def create(
        self, project_id: str, environment_id: str, key: str, value: str, description: str | None = None
    ) -> Variable:
        body = build_body(VariableRequest, key=key, value=value, description=description)
        response = self.base.request("POST", self._path(project_id, environment_id), body)
        return self.base.decode(response, Variable)

    def list(self, project_id: str, environment_id: str) -> list[Variable]:
        response = self.base.request("GET", self._path(project_id, environment_id))
        return self.base.decode(response, list[Variable])

    def get(self, project_id: str, environment_id: str, variable_id: str) -> Variable:
        response = self.base.request("GET", self._path(project_id, environment_id, variable_id))
        return self.base.decode(response, Variable)

    def update(
        self,
        project_id: str,
        environment_id: str,
        variable_id: str,
        key: str,
        value: str,
        description: str | None = None,
    ) -> Variable:
        body = build_body(VariableRequest, key=key, value=value, description=description)
        response = self.base.request("PUT", self._path(project_id, environment_id, variable_id), body)
        return self.base.decode(response, Variable)

    def delete(self, project_id: str, environment_id: str, variable_id: str):
        response = self.base.request("DELETE", self._path(project_id, environment_id, variable_id))
        self.base.expect_deleted(response)
