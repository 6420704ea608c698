"""Autogenerate registry + config documentation.

Emits a Markdown snapshot of the packaged model registry (grouped by
provider, with the credential each model needs) followed by the verifier
config schema fields. Output: docs/Generated-Registry.md (or --output).
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import get_type_hints

# Ensure root on sys.path before importing project modules
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pydantic import BaseModel  # noqa: E402

from hivecheck.config import LoggingConfig, VerifierConfig  # noqa: E402
from hivecheck.registry import ModelRegistry, load_registry  # noqa: E402

SCHEMAS = [VerifierConfig, LoggingConfig]
OUTPUT_PATH = ROOT / "docs" / "Generated-Registry.md"


def model_fields(cls: type[BaseModel]):
    hints = get_type_hints(cls)
    for fname, field in cls.model_fields.items():
        ftype = hints.get(fname, field.annotation)
        if field.default_factory is not None:
            default = field.default_factory()
        else:
            default = field.default
        yield fname, ftype, default


def generate(registry: ModelRegistry | None = None) -> str:
    reg = registry or load_registry()
    lines = [
        "# Generated Model Registry",
        "",
        "Autogenerated from hivecheck/registry/models.yaml.",
        "",
        f"Total: {reg.total} models "
        f"({len(reg.builtin_models)} built-in, "
        f"{len(reg.external_models)} external).",
        f"\n## {reg.builtin_provider} (built-in)\n",
    ]
    lines.extend(f"- `{m}`" for m in reg.builtin_models)
    for provider in reg.providers():
        lines.append(f"\n## {provider}\n")
        lines.append("| Model | Underlying | Credential |")
        lines.append("|-------|------------|------------|")
        for model_id, entry in reg.iter_external():
            if entry.provider != provider:
                continue
            lines.append(
                f"| {model_id} | {entry.underlying_name} | "
                f"{entry.credential_name} |"
            )
    lines.append("\n# Config Schemas")
    for cls in SCHEMAS:
        lines.append(f"\n## {cls.__name__}\n")
        lines.append("| Field | Type | Default |")
        lines.append("|-------|------|---------|")
        for fname, ftype, default in model_fields(cls):
            type_name = getattr(ftype, "__name__", str(ftype))
            lines.append(f"| {fname} | {type_name} | {default} |")
    return "\n".join(lines) + "\n"


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--registry", help="Registry YAML (default: packaged)")
    ap.add_argument("--output", default=str(OUTPUT_PATH))
    args = ap.parse_args(argv)
    content = generate(load_registry(args.registry))
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    print(f"[registry-doc] written {out}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
