"""Detection of error documents delivered in place of a resource.

A misconfigured or expired resource link does not fail loudly: the storage
service answers with an error document, and that document would otherwise be
written to disk under the resource's name. Such a payload usually means a
systemic problem (an expired signed URL shared by many resources), so the
installer treats a match as fatal for the whole run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

S3_BAD_MESSAGE = (
    "The downloaded file is an S3 'Access Denied' error document, not the requested "
    "resource. Check that the resource URL is public and has not expired."
)

# Error documents are small; only the head of a payload is inspected.
SNIFF_BYTES = 4096


@dataclass(frozen=True)
class PayloadSignature:
    """A known error-document content pattern."""

    name: str
    pattern: re.Pattern[bytes]
    message: str

    def matches(self, data: bytes) -> bool:
        """Check whether the head of a payload matches this signature."""
        return self.pattern.search(data[:SNIFF_BYTES]) is not None


S3_ACCESS_DENIED = PayloadSignature(
    name="s3-access-denied",
    pattern=re.compile(rb"<Error>\s*<Code>\s*AccessDenied\s*</Code>", re.IGNORECASE),
    message=S3_BAD_MESSAGE,
)

BAD_PAYLOAD_SIGNATURES: tuple[PayloadSignature, ...] = (S3_ACCESS_DENIED,)


def match_bad_payload(data: bytes) -> PayloadSignature | None:
    """Return the first known signature a payload matches, if any."""
    for signature in BAD_PAYLOAD_SIGNATURES:
        if signature.matches(data):
            return signature
    return None


def is_bad_payload(data: bytes) -> bool:
    """Check whether a payload is a known error document."""
    return match_bad_payload(data) is not None
