"""CLI entry point for certverify."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from certverify import __version__, logger
from certverify.claims import available_claims, claim_spec, generate_proof, verify_proof
from certverify.dependencies import ensure_cli_dependencies_for_analyze
from certverify.exceptions import ClaimThresholdError, PackageError
from certverify.logging import configure_logging
from certverify.matching import match_record
from certverify.pipeline import analyze_certificate, persist_report
from certverify.reference_store import ReferenceStore
from certverify.settings import Settings, get_settings
from certverify.typing.enums import ClaimType
from certverify.typing.models import AnalyzeRequest, CertificateReport


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="certverify")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a certificate image or PDF")
    analyze_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    analyze_parser.add_argument("--output", type=Path, default=None, dest="output_path")
    analyze_parser.add_argument(
        "--reference",
        type=Path,
        default=None,
        dest="reference_path",
        help="JSON file with reference certificates (and optional blacklist) to cross-reference",
    )

    subparsers.add_parser("claims", help="List provable claims")

    prove_parser = subparsers.add_parser("prove", help="Generate a claim proof from a private record")
    prove_parser.add_argument(
        "--claim",
        required=True,
        type=_claim_type,
        metavar="CLAIM",
        help=f"Claim type: {', '.join(ClaimType)}",
    )
    prove_parser.add_argument("--data", required=True, type=Path, dest="data_path")
    prove_parser.add_argument("--threshold", default=None)
    prove_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    verify_parser = subparsers.add_parser("verify-proof", help="Verify a claim proof")
    verify_parser.add_argument("--proof", required=True, type=Path, dest="proof_path")

    return parser


def _claim_type(value: str) -> ClaimType:
    try:
        return ClaimType.from_str(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _default_output_path(settings: Settings, input_path: Path) -> Path:
    return Path(settings.results_dir) / f"{input_path.stem}.report.json"


def _emit(payload: object, output_path: Path | None = None) -> None:
    """Write a JSON payload to a file, or to stdout when no path is given."""
    text = json.dumps(payload, indent=2)
    if output_path is None:
        sys.stdout.write(text + "\n")
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")


def _run_analyze(args: argparse.Namespace, settings: Settings) -> int:
    ensure_cli_dependencies_for_analyze(tesseract_cmd=settings.tesseract_cmd)
    request = AnalyzeRequest(
        input_path=args.input_path,
        output_path=args.output_path,
        reference_path=args.reference_path,
    )

    analysis = analyze_certificate(request.input_path, settings=settings)
    match = None
    if request.reference_path is not None:
        store = ReferenceStore.load(request.reference_path)
        match = match_record(
            analysis.extracted_fields,
            store.certificates,
            revoked=store.blacklist,
            missing_sentinel=settings.missing_value_sentinel,
        )

    output_path = request.output_path or _default_output_path(settings, request.input_path)
    persist_report(CertificateReport(analysis=analysis, match=match), output_path)
    logger.info("Analysis completed", extra={"output_path": str(output_path)})
    return 0


def _run_prove(args: argparse.Namespace) -> int:
    if claim_spec(args.claim).requires_threshold and not (args.threshold or "").strip():
        raise ClaimThresholdError(claim=args.claim.value)

    secret_data = json.loads(args.data_path.read_text(encoding="utf-8"))
    if not isinstance(secret_data, dict):
        message = f"Private record in {args.data_path} must be a JSON object"
        raise ValueError(message)
    proof = generate_proof(args.claim, secret_data, args.threshold)
    _emit(proof.model_dump(mode="json", by_alias=True), args.output_path)
    return 0


def _run_verify(args: argparse.Namespace) -> int:
    payload = json.loads(args.proof_path.read_text(encoding="utf-8"))
    verification = verify_proof(payload)
    _emit(verification.model_dump(mode="json", by_alias=True))
    return 0 if verification.valid else 1


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 for success, 1 for error or invalid proof).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "analyze":
            return _run_analyze(args, settings)
        if args.command == "claims":
            _emit([spec.model_dump(mode="json", by_alias=True) for spec in available_claims()])
            return 0
        if args.command == "prove":
            return _run_prove(args)
        return _run_verify(args)
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130
    except (OSError, json.JSONDecodeError, ValueError):
        logger.exception("Invalid command input", extra={"command": args.command})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
