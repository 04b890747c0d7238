"""End-to-end message analysis."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from phish_triage.core.errors import ParseError
from phish_triage.domain.email.decode import MessageDecoder, StdlibMessageDecoder
from phish_triage.domain.email.models import Email
from phish_triage.domain.email.normalize import DEFAULT_HASH_WORKERS, normalize_message, raw_to_bytes
from phish_triage.evidence.models import RedactionOptions, RedactionResult
from phish_triage.evidence.redact import redact_text
from phish_triage.intel.ioc import extract_iocs
from phish_triage.intel.models import IOCSet
from phish_triage.scoring.fusion import compute_threat_assessment
from phish_triage.scoring.models import RuleSet, ThreatAssessment

logger = logging.getLogger(__name__)


class Analysis(BaseModel):
    """The single object handed to export and history consumers."""

    model_config = ConfigDict(frozen=True)

    email: Email
    redaction: RedactionResult
    iocs: IOCSet
    threat: ThreatAssessment
    analyzed_at: str

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def utc_timestamp(now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def parse_message(
    raw: bytes | bytearray | str,
    *,
    decoder: MessageDecoder | None = None,
    hash_workers: int = DEFAULT_HASH_WORKERS,
) -> Email:
    """Decode and normalize one raw message; every decoder failure becomes ``ParseError``."""

    if raw is None:
        raise ParseError("no message content supplied")
    data = raw_to_bytes(raw)
    if not data.strip():
        raise ParseError("message is empty")
    active = decoder or StdlibMessageDecoder()
    try:
        decoded = active.decode(data)
    except ParseError:
        raise
    except Exception as exc:
        raise ParseError(f"failed to decode message: {exc}") from exc
    return normalize_message(decoded, raw, hash_workers=hash_workers)


def analyze_message(
    raw: bytes | bytearray | str,
    *,
    options: RedactionOptions | None = None,
    rules: RuleSet | None = None,
    decoder: MessageDecoder | None = None,
    hash_workers: int = DEFAULT_HASH_WORKERS,
) -> Analysis:
    email = parse_message(raw, decoder=decoder, hash_workers=hash_workers)
    return analyze_email(email, options=options, rules=rules)


def analyze_email(
    email: Email,
    *,
    options: RedactionOptions | None = None,
    rules: RuleSet | None = None,
    analyzed_at: str | None = None,
) -> Analysis:
    redaction = redact_text(email.body_text, options)
    iocs = extract_iocs(email)
    threat = compute_threat_assessment(email, rules)
    logger.debug("analysis id=%s level=%s score=%d", email.id, threat.level, threat.score)
    return Analysis(
        email=email,
        redaction=redaction,
        iocs=iocs,
        threat=threat,
        analyzed_at=analyzed_at or utc_timestamp(),
    )


def analyze_file(path: str | Path, **kwargs: Any) -> Analysis:
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as exc:
        raise ParseError(f"failed to read file {p}: {exc}") from exc
    return analyze_message(raw, **kwargs)
