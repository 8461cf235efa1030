# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
GitHub integration - outbound issue actions via the REST API.
"""

from typing import Any, Dict, Optional, Tuple

from hookflow.core.errors import ValidationError
from hookflow.integrations.base import BaseServiceClient, ServiceTarget
from hookflow.integrations.exceptions import GitHubAPIError, IntegrationConfigError
from hookflow.models.workflow import AddCommentParams, CreateIssueParams


def parse_repository(repo: str) -> Tuple[str, str]:
    """
    Split "owner/repo".

    Raises:
        IntegrationConfigError: If the value is not in owner/repo format
    """
    parts = repo.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise IntegrationConfigError(f"Invalid repository format: {repo}. Expected format: owner/repo")
    return parts[0], parts[1]


class GitHubClient(BaseServiceClient):
    service = "github"
    display_name = "GitHub"
    error_class = GitHubAPIError

    def _headers(self, target: ServiceTarget) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {target.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "Content-Type": "application/json",
        }

    def _repository(self, target: ServiceTarget, explicit: Optional[str]) -> Tuple[str, str]:
        """Action param first, then connection `repository`, then first of `repositories`"""
        repo = explicit or target.config.get("repository")
        if not repo:
            repositories = target.config.get("repositories") or []
            repo = repositories[0] if repositories else None
        if not repo:
            raise IntegrationConfigError("GitHub owner and repo are required")
        return parse_repository(repo)

    async def create_issue(self, target: ServiceTarget, params: CreateIssueParams) -> Dict[str, Any]:
        owner, repo = self._repository(target, params.repository)
        data = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues",
            target,
            json={
                "title": params.title,
                "body": params.body,
                "labels": params.labels,
                "assignees": params.assignees,
            },
        )
        return {"id": data.get("id"), "number": data.get("number"), "html_url": data.get("html_url")}

    async def add_comment(self, target: ServiceTarget, params: AddCommentParams) -> Dict[str, Any]:
        owner, repo = self._repository(target, params.repository)
        try:
            issue_number = int(params.issue_number)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid issue number: {params.issue_number!r}", field="issue_number")

        data = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            target,
            json={"body": params.body},
        )
        return {"id": data.get("id"), "html_url": data.get("html_url")}
