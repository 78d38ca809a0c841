"""
Command-line interface for FluxLite batch operations.

Inspect, validate, export and share designs without the editor.

Usage::

    python -m cli validate design.json
    python -m cli netlist design.json
    python -m cli netlist design.json --format json
    python -m cli bom design.json
    python -m cli export design.json --output copy.json
    python -m cli share design.json --base-url https://example.org/editor
    python -m cli unshare <token> --output design.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controllers.file_controller import (
    decode_share_token,
    encode_share_token,
    export_design,
    parse_design,
    share_url,
)
from models.design import DesignModel
from models.views import bill_of_materials, describe_net

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def try_load_design(filepath: str) -> tuple[DesignModel | None, str]:
    """Load and validate a design JSON file without exiting.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        return parse_design(path.read_bytes()), ""
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"
    except ValueError as e:
        return None, f"invalid design file: {e}"
    except OSError as e:
        return None, f"cannot read {filepath}: {e}"


def load_design(filepath: str) -> DesignModel:
    """Load and validate a design JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    model, error = try_load_design(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def _emit(text: str, output: str | None, what: str) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        print(f"{what} written to {output}", file=sys.stderr)
    else:
        print(text)


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a design file."""
    model, error = try_load_design(args.design)
    if model is None:
        print(f"Design has errors: {args.design}", file=sys.stderr)
        print(f"  - {error}", file=sys.stderr)
        return 1

    print(f"Design is valid: {args.design}")
    unresolved = [w.id for w in model.wires if w.is_complete() and model.wire_segment(w) is None]
    for wire_id in unresolved:
        print(f"  Warning: wire {wire_id} references a missing pin")
    open_wires = [w.id for w in model.wires if w.is_open()]
    for wire_id in open_wires:
        print(f"  Warning: wire {wire_id} is not connected at its end")
    return 0


def cmd_netlist(args: argparse.Namespace) -> int:
    """Print the nets of a design."""
    model = load_design(args.design)
    nets = model.nets()

    if args.format == "json":
        output = [
            {
                "name": net.name,
                "pins": [ref.to_dict() for ref in net.pins],
                "labels": describe_net(net, model),
            }
            for net in nets
        ]
        _emit(json.dumps(output, indent=2), args.output, "Netlist")
        return 0

    if not nets:
        _emit("No nets", args.output, "Netlist")
        return 0
    lines = [f"{net.name}: {', '.join(describe_net(net, model))}" for net in nets]
    _emit("\n".join(lines), args.output, "Netlist")
    return 0


def cmd_bom(args: argparse.Namespace) -> int:
    """Print the bill of materials of a design."""
    model = load_design(args.design)
    bom = bill_of_materials(model.components.values())

    if args.format == "json":
        output = [{"kind": kind.value, "qty": qty} for kind, qty in bom]
        print(json.dumps(output, indent=2))
        return 0

    if not bom:
        print("No components")
        return 0
    for kind, qty in bom:
        print(f"{kind.value}\t{qty}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Re-export a design as normalized JSON."""
    model = load_design(args.design)
    _emit(export_design(model), args.output, "JSON")
    return 0


def cmd_share(args: argparse.Namespace) -> int:
    """Print a share token (or link) for a design."""
    model = load_design(args.design)
    if args.base_url:
        print(share_url(model, args.base_url))
    else:
        print(encode_share_token(model))
    return 0


def cmd_unshare(args: argparse.Namespace) -> int:
    """Decode a share token (or link) back to design JSON."""
    token = args.token.split("#", 1)[1] if "#" in args.token else args.token
    model = decode_share_token(token)
    if model is None:
        print("Error: not a valid share token", file=sys.stderr)
        return 1
    _emit(export_design(model), args.output, "JSON")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="fluxlite",
        description="FluxLite batch operations: validate, inspect, export and share schematic designs.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # validate
    val_parser = subparsers.add_parser("validate", help="Check a design file for errors")
    val_parser.add_argument("design", help="Path to design JSON file")

    # netlist
    net_parser = subparsers.add_parser("netlist", help="List the nets of a design")
    net_parser.add_argument("design", help="Path to design JSON file")
    net_parser.add_argument("--format", "-f", choices=["text", "json"], default="text", help="Output format (default: text)")
    net_parser.add_argument("--output", "-o", help="Write output to file instead of stdout")

    # bom
    bom_parser = subparsers.add_parser("bom", help="Count components by kind")
    bom_parser.add_argument("design", help="Path to design JSON file")
    bom_parser.add_argument("--format", "-f", choices=["text", "json"], default="text", help="Output format (default: text)")

    # export
    exp_parser = subparsers.add_parser("export", help="Write the design as normalized JSON")
    exp_parser.add_argument("design", help="Path to design JSON file")
    exp_parser.add_argument("--output", "-o", help="Write output to file instead of stdout")

    # share
    share_parser = subparsers.add_parser("share", help="Encode a design as a share token")
    share_parser.add_argument("design", help="Path to design JSON file")
    share_parser.add_argument("--base-url", help="Print a full link with the token in its fragment")

    # unshare
    unshare_parser = subparsers.add_parser("unshare", help="Decode a share token or link to JSON")
    unshare_parser.add_argument("token", help="Share token, or a link ending in #<token>")
    unshare_parser.add_argument("--output", "-o", help="Write output to file instead of stdout")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "validate": cmd_validate,
        "netlist": cmd_netlist,
        "bom": cmd_bom,
        "export": cmd_export,
        "share": cmd_share,
        "unshare": cmd_unshare,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    logger.debug("Running command %s", args.command)
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
