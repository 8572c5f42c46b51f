from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .diagnostics import StdlibFeatureLogger
from .errors import AdapterFeaturesError
from .feature_map import parse_feature_map, parse_project_config
from .types import ImageService, OutputMode, SupportKind
from .validation import validate_supported_features


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.environ.get(key)
    if v is None:
        return default
    s = str(v).strip()
    return s if s else default


def _print_json(obj: Any) -> None:
    print(json.dumps(obj, indent=2, sort_keys=True))


def _load_json(path: str, flag: str) -> Any:
    p = Path(path).expanduser()
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise SystemExit(f"{flag}: file not found: {p}")
    except json.JSONDecodeError as e:
        raise SystemExit(f"{flag}: invalid JSON in {p}: {e}")


def _cmd_check(args: argparse.Namespace) -> int:
    if not args.adapter_name:
        raise SystemExit("Missing --adapter-name (or $ADAPTERFEATURES_ADAPTER_NAME).")
    if not args.features:
        raise SystemExit("Missing --features (or $ADAPTERFEATURES_FEATURES).")

    raw_config: Dict[str, Any] = {}
    if args.config:
        loaded = _load_json(args.config, "--config")
        if not isinstance(loaded, dict):
            raise SystemExit("--config: top-level JSON must be an object.")
        raw_config = dict(loaded)
    if args.output:
        raw_config["output"] = args.output
    if args.image_service:
        raw_config["image"] = {"service": {"entrypoint": args.image_service}}

    try:
        features = parse_feature_map(_load_json(args.features, "--features"))
        config = parse_project_config(raw_config)
    except AdapterFeaturesError as e:
        raise SystemExit(str(e))

    logging.basicConfig(stream=sys.stderr, format="%(levelname)s [%(name)s] %(message)s")
    result = validate_supported_features(str(args.adapter_name), features, config, StdlibFeatureLogger())

    if args.json:
        _print_json(result.as_dict())
    else:
        for feature, ok in result.as_dict().items():
            print(f"{feature}: {'ok' if ok else 'not supported'}")
    return 0 if result.ok else 1


def _cmd_support_kinds(_: argparse.Namespace) -> int:
    for k in SupportKind:
        print(k.value)
    return 0


def _cmd_image_services(_: argparse.Namespace) -> int:
    for s in ImageService:
        print(f"{s.display_name}: {s.value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="adapterfeatures", description="Check project config against adapter feature declarations.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("support-kinds", help="List the support kinds an adapter may declare.").set_defaults(_fn=_cmd_support_kinds)
    sub.add_parser("image-services", help="List the built-in image services checked for compatibility.").set_defaults(
        _fn=_cmd_image_services
    )

    chk = sub.add_parser("check", help="Validate a config against an adapter feature map (exit 1 on unsupported features).")
    chk.add_argument("--adapter-name", default=_env("ADAPTERFEATURES_ADAPTER_NAME"), help="Adapter name used in diagnostics.")
    chk.add_argument("--features", default=_env("ADAPTERFEATURES_FEATURES"), help="Path to the adapter feature map (JSON).")
    chk.add_argument("--config", default=_env("ADAPTERFEATURES_CONFIG"), help="Optional path to the project config (JSON).")
    chk.add_argument("--output", choices=[m.value for m in OutputMode], default=None, help="Override the config output mode.")
    chk.add_argument("--image-service", default=None, help="Override the config image service entrypoint.")
    chk.add_argument("--json", action="store_true", help="Print the result as JSON.")
    chk.set_defaults(_fn=_cmd_check)

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    fn = getattr(args, "_fn", None)
    if not callable(fn):
        raise SystemExit(2)
    return int(fn(args))


if __name__ == "__main__":
    raise SystemExit(main())
