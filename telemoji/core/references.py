"""
Turns raw positional arguments into pack references.

Arguments are a sequence of pack links, each optionally followed by one bare
token naming the local output id::

    https://t.me/addstickers/Animals cats https://t.me/addemoji/Blobs
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from telemoji.models.pack import PackReference
from telemoji.utils.path import is_valid_output_id, parse_pack_url

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class ResolveIssue:
    """A discarded argument and the reason it was discarded."""

    token: str
    reason: str


@dataclass
class ResolveResult:
    references: list[PackReference] = field(default_factory=list)
    issues: list[ResolveIssue] = field(default_factory=list)


def resolve_pack_references(tokens: Iterable[str]) -> ResolveResult:
    """
    Parses arguments into an ordered list of references.

    A link starts a new reference. A bare token without whitespace sets the output
    id of the latest reference; only the first such token counts. Anything else is
    reported as an issue and skipped.
    """
    result = ResolveResult()
    pending: Optional[PackReference] = None

    for token in tokens:
        remote_id = parse_pack_url(token)
        if remote_id is not None:
            if not is_valid_output_id(remote_id):
                result.issues.append(
                    ResolveIssue(token, f"pack id '{remote_id}' is not usable")
                )
                pending = None
                continue
            pending = PackReference(remote_id=remote_id)
            result.references.append(pending)
            continue

        if not token or _WHITESPACE.search(token):
            result.issues.append(ResolveIssue(token, "invalid pack"))
            continue

        if pending is None:
            result.issues.append(
                ResolveIssue(token, "no pack to apply this custom id to")
            )
        elif pending.output_id is not None:
            result.issues.append(
                ResolveIssue(
                    token,
                    f"pack {pending.remote_id} already has custom id "
                    f"{pending.output_id}",
                )
            )
        elif not is_valid_output_id(token):
            result.issues.append(
                ResolveIssue(token, "custom id is not a valid directory name")
            )
        else:
            pending.output_id = token

    return result
