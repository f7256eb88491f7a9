from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HookSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    branch_name_regex: str = Field(default="", alias="branchNameRegex")
    branch_name_exemptions: tuple[str, ...] = Field(default=(), alias="branchNameExemptions")
    exclude_merge_commits: bool = Field(default=False, alias="excludeMergeCommits")
    exclude_service_user_commits: bool = Field(default=False, alias="excludeServiceUserCommits")
    exclude_by_regex: str = Field(default="", alias="excludeByRegex")
    commit_message_regex: str = Field(default="", alias="commitMessageRegex")
    require_matching_author_email: bool = Field(default=False, alias="requireMatchingAuthorEmail")
    require_matching_author_name: bool = Field(default=False, alias="requireMatchingAuthorName")
    require_jira_issue: bool = Field(default=False, alias="requireJiraIssue")
    ignore_unknown_issue_project_keys: bool = Field(
        default=False, alias="ignoreUnknownIssueProjectKeys"
    )
    issue_jql_matcher: str = Field(default="", alias="issueJqlMatcher")

    @field_validator(
        "branch_name_regex",
        "exclude_by_regex",
        "commit_message_regex",
        "issue_jql_matcher",
        mode="before",
    )
    @classmethod
    def _none_is_unset(cls, value: object) -> object:
        if value is None:
            return ""
        return value

    @field_validator("branch_name_exemptions", mode="before")
    @classmethod
    def _split_exemptions(cls, value: object) -> object:
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(item.strip() for item in value.split(",") if item.strip())
        return value
