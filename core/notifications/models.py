"""
Request, target, and result types for notification fan-out.

A request is parsed once into exactly one target variant. The variant is chosen by
priority (jobs, then audience, then a single recipient), so the lower-priority fields
of a request are never looked at once a higher-priority one is present.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from core.notifications import config
from core.notifications.errors import InvalidArgument
from core.notifications.identifiers import canonical_id


@dataclass(frozen=True)
class JobTarget:
    """Applicants of one or more jobs."""

    job_ids: Tuple[str, ...]


@dataclass(frozen=True)
class AudienceTarget:
    """Every user, or every user on one tier."""

    audience: str

    @property
    def is_everyone(self) -> bool:
        return self.audience == config.AUDIENCE_ALL


@dataclass(frozen=True)
class DirectTarget:
    """A single explicit recipient (or nobody, when none was given)."""

    user_id: Optional[str] = None


Target = Union[JobTarget, AudienceTarget, DirectTarget]


@dataclass(frozen=True)
class NotificationRequest:
    payload: Dict
    target: Target


@dataclass(frozen=True)
class Resolution:
    target: Target
    recipients: FrozenSet[str]

    @property
    def empty_message(self) -> str:
        if isinstance(self.target, JobTarget):
            return config.NO_APPLICANTS_MESSAGE
        if isinstance(self.target, AudienceTarget):
            return config.NO_AUDIENCE_MESSAGE
        return config.NO_RECIPIENT_MESSAGE


@dataclass
class DispatchResult:
    queued: bool
    recipients: int
    failed: List[Tuple[str, str]] = field(default_factory=list)
    message: Optional[str] = None

    def to_response(self) -> Dict:
        body: Dict = {"ok": True, "queued": self.queued, "recipients": self.recipients}
        if self.failed:
            body["failed"] = len(self.failed)
        if self.message:
            body["message"] = self.message
        return body


@dataclass
class PreviewResult:
    recipients: int
    sample: List[Dict] = field(default_factory=list)

    def to_response(self) -> Dict:
        return {"recipients": self.recipients, "sample": list(self.sample)}


def _collect_job_ids(payload: Dict) -> List[str]:
    collected: List[str] = []

    job_id = payload.get("jobId")
    if job_id not in (None, ""):
        collected.append(canonical_id(job_id, "jobId"))

    job_ids = payload.get("jobIds")
    if job_ids is not None:
        if not isinstance(job_ids, list):
            raise InvalidArgument("jobIds must be a list of job ids")
        collected.extend(canonical_id(j, "jobIds") for j in job_ids)

    # jobId repeated inside jobIds still counts as one job
    return list(dict.fromkeys(collected))


def _audience(value) -> str:
    if not isinstance(value, str):
        raise InvalidArgument(f"targetAudience must be a string, got {value!r}")
    if value != config.AUDIENCE_ALL and value not in config.AUDIENCE_TIERS:
        allowed = ", ".join((config.AUDIENCE_ALL,) + config.AUDIENCE_TIERS)
        raise InvalidArgument(f"Unknown targetAudience {value!r} (expected one of: {allowed})")
    return value


def parse_request(payload: Optional[Dict]) -> NotificationRequest:
    """
    Validate the addressing fields of `payload` and pick its target.

    Raises InvalidArgument for malformed ids or an unknown audience.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise InvalidArgument("Notification request must be a JSON object")

    job_ids = _collect_job_ids(payload)
    if job_ids:
        return NotificationRequest(payload=payload, target=JobTarget(tuple(job_ids)))

    if payload.get("targetAudience"):
        return NotificationRequest(payload=payload, target=AudienceTarget(_audience(payload["targetAudience"])))

    to_user_id = payload.get("toUserId")
    if to_user_id in (None, ""):
        return NotificationRequest(payload=payload, target=DirectTarget())
    return NotificationRequest(payload=payload, target=DirectTarget(canonical_id(to_user_id, "toUserId")))


def build_individual(request: NotificationRequest, user_id: str) -> Dict:
    """Copy the request payload and address it to `user_id`."""
    individual = dict(request.payload)
    individual["toUserId"] = user_id

    if isinstance(request.target, JobTarget):
        job_ids = list(request.target.job_ids)
        individual["jobIds"] = job_ids
        if len(job_ids) == 1:
            individual["jobId"] = job_ids[0]
        else:
            individual.pop("jobId", None)
    return individual


__all__ = [
    "JobTarget",
    "AudienceTarget",
    "DirectTarget",
    "Target",
    "NotificationRequest",
    "Resolution",
    "DispatchResult",
    "PreviewResult",
    "parse_request",
    "build_individual",
]
