"""Command line entry point.

Usage:
    hivecheck                       # check every registered model
    hivecheck --providers openai groq
    hivecheck --no-delay --env-file ../.env
    hivecheck --list                # print the registry and exit

Exit codes:
    0  run completed (even with failed / skipped models)
    1  unexpected error during the run
    2  invalid config or registry
"""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

from pydantic import ValidationError

from hivecheck.config import VerifierConfig, get_config
from hivecheck.errors import ConfigError, RegistryError, map_exception
from hivecheck.observability import configure_logging
from hivecheck.registry import ModelRegistry, load_registry
from hivecheck.report import Reporter
from hivecheck.runner import Pacer, run_all

logger = logging.getLogger("hivecheck.cli")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hivecheck",
        description="Verify credentials and CLI availability for every "
        "registered model.",
    )
    p.add_argument(
        "--env-file",
        help="Path to the .env file to load; relative paths resolve "
        "against the current working directory (default .env)",
    )
    p.add_argument("--registry", help="Path to a registry YAML file")
    p.add_argument(
        "--providers",
        nargs="+",
        metavar="PROVIDER",
        help="Only check external models of these providers",
    )
    p.add_argument("--tool", help="Companion CLI to probe for (default aider)")
    delay = p.add_mutually_exclusive_group()
    delay.add_argument(
        "--delay",
        type=float,
        help="Seconds to wait between external checks",
    )
    delay.add_argument(
        "--no-delay",
        action="store_true",
        help="Do not wait between external checks",
    )
    p.add_argument(
        "--list",
        action="store_true",
        help="Print the registry and exit without checking",
    )
    return p


def _print_registry(reporter: Reporter, registry: ModelRegistry) -> None:
    out = reporter.console
    out.print(f"[bold]{registry.builtin_provider}[/bold] (built-in)")
    for model_id in registry.builtin_models:
        out.print(f"  {model_id}")
    for provider in registry.providers():
        out.print(f"[bold]{provider}[/bold]")
        for model_id, entry in registry.iter_external():
            if entry.provider == provider:
                out.print(
                    f"  {model_id}  [dim]{entry.credential_name}[/dim]"
                )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    reporter = Reporter()
    try:
        agg = get_config()
        configure_logging(agg.logging)
        updates = {}
        if args.env_file:
            updates["env_file"] = args.env_file
        if args.registry:
            updates["registry_path"] = args.registry
        if args.tool:
            updates["tool"] = args.tool
        if args.no_delay:
            updates["check_delay_s"] = 0.0
        elif args.delay is not None:
            if args.delay < 0:
                raise ConfigError("--delay must be >= 0")
            updates["check_delay_s"] = args.delay
        try:
            cfg = VerifierConfig.model_validate(
                {**agg.verifier.model_dump(), **updates}
            )
        except ValidationError as e:
            raise ConfigError(f"invalid command line option: {e}") from e

        if args.list:
            registry = load_registry(cfg.registry_path)
            _print_registry(
                reporter, registry.filter_providers(args.providers or [])
            )
            return 0

        run_all(
            config=cfg,
            pacer=Pacer(cfg.check_delay_s),
            reporter=reporter,
            providers=args.providers,
        )
    except (ConfigError, RegistryError) as e:
        phase = "registry" if isinstance(e, RegistryError) else "config"
        logger.error("%s: %s", map_exception(e, phase), e)
        reporter.error(str(e))
        return 2
    except Exception as e:  # noqa: BLE001
        logger.exception("%s", map_exception(e, "run"))
        reporter.error(str(e))
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
