"""Project endpoints."""

from .base import BaseClient, build_body, segment
from .models import Project, ProjectRequest


class ProjectsController:
    def __init__(self, base: BaseClient):
        self.base = base

    def create(self, name: str, description: str | None = None, git_repo: str | None = None) -> Project:
        body = build_body(ProjectRequest, name=name, description=description, git_repo=git_repo)
        response = self.base.request("POST", "/projects", body)
        return self.base.decode(response, Project)

    def list(self) -> list[Project]:
        response = self.base.request("GET", "/projects")
        return self.base.decode(response, list[Project])

    def get(self, project_id: str) -> Project:
        response = self.base.request("GET", f"/projects/{segment(project_id)}")
        return self.base.decode(response, Project)

    def update(
        self, project_id: str, name: str, description: str | None = None, git_repo: str | None = None
    ) -> Project:
        body = build_body(ProjectRequest, name=name, description=description, git_repo=git_repo)
        response = self.base.request("PUT", f"/projects/{segment(project_id)}", body)
        return self.base.decode(response, Project)

    def delete(self, project_id: str):
        response = self.base.request("DELETE", f"/projects/{segment(project_id)}")
        self.base.expect_deleted(response)
