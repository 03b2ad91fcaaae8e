from pydantic import AwareDatetime, BaseModel, Field
from typing import Annotated

Fingerprint = Annotated[str, Field(pattern=r"^[0-9a-f]{40}$")]
SingleLine = Annotated[str, Field(pattern=r"^[^\r\n]*$")]

COMMIT_FIELDS = ("parent", "author", "message", "date")

class IndexEntry(BaseModel):
    path: Annotated[SingleLine, Field(min_length=1)]
    hash: Fingerprint

class CommitInfo(BaseModel):
    parent: str = Field(default="", pattern=r"^([0-9a-f]{40})?$")
    blobs: list[IndexEntry]
    author: SingleLine
    message: SingleLine
    date: AwareDatetime

    def to_record(self) -> bytes:
        # field order is fixed so equal commits hash equally
        lines = [f"parent {self.parent}"]
        lines.extend(f"blob {entry.hash} {entry.path}" for entry in self.blobs)
        lines.append(f"author {self.author}")
        lines.append(f"message {self.message}")
        lines.append(f"date {self.date.isoformat()}")
        return ("\n".join(lines) + "\n").encode()

    @classmethod
    def from_record(cls, record: bytes) -> "CommitInfo":
        """Parse a serialized commit. Raises ValueError on malformed input."""
        fields: dict = {"blobs": []}
        for line in record.decode().split("\n"):
            if not line:
                continue
            key, _, value = line.partition(" ")
            if key == "blob":
                blob_hash, _, path = value.partition(" ")
                fields["blobs"].append({"path": path, "hash": blob_hash})
            elif key in COMMIT_FIELDS:
                fields[key] = value
            else:
                raise ValueError(f"unknown commit field '{key}'")
        return cls(**fields)

class HeadInfo(BaseModel):
    ref: str    # e.g. refs/heads/main

class StatusInfo(BaseModel):
    staged: set[str] = Field(default_factory=set)
    modified: set[str] = Field(default_factory=set)
    untracked: set[str] = Field(default_factory=set)

    @property
    def clean(self) -> bool:
        return not (self.staged or self.modified or self.untracked)

class PendingCommit(BaseModel):
    commit: Fingerprint
    parent: str
    created_object: bool
