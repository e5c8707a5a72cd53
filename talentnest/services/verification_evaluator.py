"""
Verification decision rules.

Turns an admin action plus optional per-criterion details into the four
resolved sub-checks, the aggregate status and the notes to persist. Pure and
deterministic: no I/O, no clock.

Approval is an attestation: it marks every criterion as satisfied regardless
of what was recorded before. Rejection keeps whatever per-criterion outcome
the reviewer supplied so the artisan gets granular feedback.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from talentnest.core.exceptions import InvalidActionException
from talentnest.schemas.verification import VerificationAction, VerificationDetails

DEFAULT_APPROVAL_NOTES = "Application approved after comprehensive review."
DEFAULT_REJECTION_NOTES = "Application rejected after review."


@dataclass(frozen=True)
class VerificationOutcome:
    """Resolved result of a verification decision."""

    matric_number_verified: bool
    business_name_verified: bool
    certificates_verified: bool
    bio_verified: bool
    verification_status: str
    verification_notes: str

    @property
    def approved(self) -> bool:
        """Whether the outcome makes the profile publicly eligible."""
        return self.verification_status == "approved"

    def sub_checks(self) -> dict[str, bool]:
        """The four sub-check columns and their values."""
        return {
            "matric_number_verified": self.matric_number_verified,
            "business_name_verified": self.business_name_verified,
            "certificates_verified": self.certificates_verified,
            "bio_verified": self.bio_verified,
        }


def parse_action(action: Any) -> VerificationAction:
    """
    Coerce an action value into the supported enum.

    Raises:
        InvalidActionException: If the action is neither approve nor reject
    """
    if isinstance(action, VerificationAction):
        return action
    try:
        return VerificationAction(action)
    except ValueError as e:
        raise InvalidActionException(action) from e


def evaluate_decision(
    action: Any,
    verification_details: VerificationDetails | Mapping[str, Any] | None = None,
    notes: str | None = None,
) -> VerificationOutcome:
    """
    Compute the outcome of an admin decision.

    Args:
        action: ``approve`` or ``reject``
        verification_details: Per-criterion results, only used on rejection
        notes: Reviewer notes; a default per action is used when blank

    Returns:
        The resolved outcome

    Raises:
        InvalidActionException: If the action is unsupported
    """
    resolved_action = parse_action(action)

    if resolved_action is VerificationAction.APPROVE:
        return VerificationOutcome(
            matric_number_verified=True,
            business_name_verified=True,
            certificates_verified=True,
            bio_verified=True,
            verification_status="approved",
            verification_notes=notes or DEFAULT_APPROVAL_NOTES,
        )

    if verification_details is None:
        details = VerificationDetails()
    elif isinstance(verification_details, VerificationDetails):
        details = verification_details
    else:
        details = VerificationDetails.model_validate(dict(verification_details))

    return VerificationOutcome(
        matric_number_verified=details.matric_number_verified,
        business_name_verified=details.business_name_verified,
        certificates_verified=details.certificates_verified,
        bio_verified=details.bio_verified,
        verification_status="rejected",
        verification_notes=notes or DEFAULT_REJECTION_NOTES,
    )
