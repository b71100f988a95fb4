"""Run one Adobe Sign -> Content Manager transfer.

Usage:
  python -m signed_records.cli [--webhook AdobeSignWebhookExample.json] [--log-format json]
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from common.logging import configure_logging

from .config import PipelineSettings
from .pipeline import DocumentPipeline, PipelineOutcome
from .webhook import load_webhook_event

_LOG = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="signed_records", description=__doc__.splitlines()[0])
    p.add_argument("--webhook", help="webhook notification JSON (default: ADOBE_SIGN_WEBHOOK_FIXTURE)")
    p.add_argument("--log-format", choices=("text", "json"), help="default: LOG_FORMAT or text")
    p.add_argument("--env-file", help="dotenv file to load before reading settings")
    return p.parse_args(argv)


async def _run(settings: PipelineSettings, agreement_id: str) -> PipelineOutcome:
    async with DocumentPipeline(settings) as pipeline:
        return await pipeline.run(agreement_id)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_format, service_name="signed_records")

    settings = PipelineSettings.from_env(args.env_file)
    missing = settings.missing()
    if missing:
        raise SystemExit(f"Set {', '.join(missing)} in the environment or secrets file")
    _LOG.debug("Settings: %s", settings.redacted())

    event = load_webhook_event(args.webhook or settings.webhook_fixture)
    _LOG.info(
        "Transferring agreement %s (event=%s, at=%s)",
        event.agreement_id,
        event.event,
        event.occurred_at,
        extra={"agreement_id": event.agreement_id},
    )

    outcome = asyncio.run(_run(settings, event.agreement_id))
    print(outcome.summary())
    return 0 if outcome.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
