"""CLI for serving the API and evaluating single records."""
import argparse
import json
import math
import sys

from pydantic import ValidationError

from decision_table.components.contracts import ErrorMessage, InputRecord
from decision_table.components.evaluator import MissingFieldError, evaluate
from decision_table.core.config import get_settings


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    from decision_table.main import app

    settings = get_settings()
    uvicorn.run(
        app,
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=False,
    )
    return 0


def cmd_evaluate(args):
    """Evaluate one JSON record from the argument or stdin."""
    raw = args.record if args.record is not None else sys.stdin.read()
    try:
        record = InputRecord.model_validate_json(raw)
    except ValidationError as e:
        print(json.dumps(ErrorMessage(code=400, message="INVALID_PARAMS_FORMAT").to_body()), file=sys.stderr)
        for err in e.errors(include_url=False):
            print(f"  {'.'.join(str(p) for p in err['loc']) or '<body>'}: {err['msg']}", file=sys.stderr)
        return 2

    try:
        result = evaluate(record)
    except MissingFieldError as e:
        print(json.dumps(ErrorMessage(code=400, message=str(e), field=e.field).to_body()), file=sys.stderr)
        return 1

    if not math.isfinite(result.value):
        print(json.dumps(ErrorMessage(code=400, message="Computed value is out of range").to_body()), file=sys.stderr)
        return 1

    print(json.dumps(result.to_wire()))
    return 1 if result.is_error else 0


def build_parser():
    p = argparse.ArgumentParser(prog="decision-table")
    sub = p.add_subparsers(dest="cmd")
    s = sub.add_parser("serve", help="Run the HTTP API")
    s.add_argument("--host", help="Listen address (default from API_HOST)")
    s.add_argument("--port", type=int, help="Listen port (default from API_PORT)")
    s.set_defaults(func=cmd_serve)
    s = sub.add_parser("evaluate", help="Evaluate one JSON record")
    s.add_argument("record", nargs="?", help="JSON object; read from stdin when omitted")
    s.set_defaults(func=cmd_evaluate)
    return p


def main(argv=None):
    p = build_parser()
    args = p.parse_args(argv)
    if not hasattr(args, "func"):
        p.print_help()
        return 2
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
