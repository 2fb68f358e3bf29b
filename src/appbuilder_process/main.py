"""CLI entrypoint for running process definitions locally."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from appbuilder_process import __version__
from appbuilder_process.application import Application
from appbuilder_process.config import ProcessSettings
from appbuilder_process.errors import CollectingErrorReporter, ProcessError, TaskNotFoundError
from appbuilder_process.logging import configure_logging
from appbuilder_process.objects import ObjectRegistry, load_objects
from appbuilder_process.process.definition import ProcessDefinition
from appbuilder_process.process.runner import ProcessRunner, RunResult
from appbuilder_process.process.store import InstanceStore

logger = logging.getLogger(__name__)


class InstanceNotFoundError(LookupError):
    pass


def _parse_json_arg(value: str, *, name: str) -> Any:
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"{name} must be valid JSON: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appbuilder-process",
        description="Run AppBuilder process definitions locally",
    )
    parser.add_argument(
        "--version", action="version", version=f"appbuilder-process {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    describe = subparsers.add_parser(
        "describe", help="List the elements of a process and the data each provides"
    )
    describe.add_argument("--definition", required=True, type=Path, help="Process JSON file")
    describe.add_argument(
        "--json", action="store_true", help="Print the description as a JSON document"
    )

    start = subparsers.add_parser(
        "start", help="Fire a trigger key and run every process instance it starts"
    )
    start.add_argument("--definition", required=True, type=Path, help="Process JSON file")
    start.add_argument(
        "--trigger-key",
        required=True,
        help="Trigger key to fire, e.g. '<objectID>.added'",
    )
    start.add_argument(
        "--data",
        default="{}",
        help="JSON object with the record captured by the trigger",
    )

    respond = subparsers.add_parser(
        "respond", help="Record an approval response and resume the instance"
    )
    respond.add_argument("--definition", required=True, type=Path, help="Process JSON file")
    respond.add_argument("--instance-id", required=True, help="Process instance id")
    respond.add_argument("--task-id", required=True, help="Approval task id")
    respond.add_argument("--response", required=True, help="JSON value of the form response")
    respond.add_argument("--form-id", default=None, help="Optional id of the submitted form")

    show = subparsers.add_parser("show", help="Print a stored process instance as JSON")
    show.add_argument("--instance-id", required=True, help="Process instance id")

    return parser


def _load_process(path: Path, application: Application) -> ProcessDefinition:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return ProcessDefinition.from_json(raw, application=application)


def _describe_json(process: ProcessDefinition) -> dict[str, Any]:
    elements = []
    for element in process.elements:
        refs = element.process_data_fields() or []
        elements.append({**element.to_obj(), "dataFields": [ref.to_json() for ref in refs]})
    return {"id": process.id, "name": process.name, "elements": elements}


def _print_result(result: RunResult) -> None:
    instance = result.instance
    print(f"{instance.id} {instance.status.value}")
    for task_id in result.waiting_tasks:
        print(f"  waiting: {task_id}")
    if instance.error:
        print(f"  error: {instance.error}")


def _print_reported(errors: CollectingErrorReporter) -> None:
    for error in errors.errors:
        print(f"warning: {error}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ProcessSettings()
    except ValidationError as e:
        # Logging isn't configured yet.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    store = InstanceStore(settings.instances_file)
    errors = CollectingErrorReporter()

    try:
        if args.command == "show":
            instance = store.get(args.instance_id)
            if instance is None:
                raise InstanceNotFoundError(args.instance_id)
            print(json.dumps(instance.model_dump(mode="json"), indent=2, ensure_ascii=False))
            return 0

        objects = load_objects(settings.objects_path) if settings.objects_path else ObjectRegistry()
        application = Application(objects=objects, errors=errors)
        process = _load_process(args.definition, application)

        if args.command == "describe" and args.json:
            print(json.dumps(_describe_json(process), indent=2, ensure_ascii=False))
            _print_reported(errors)
            return 0

        if args.command == "describe":
            print(f"Process {process.id} {process.name!r}")
            for element in process.elements:
                print(f"- {element.id} [{element.type}] {element.label}")
                for ref in element.process_data_fields() or []:
                    print(f"    {ref.key}  ({ref.label})")
            _print_reported(errors)
            return 0

        runner = ProcessRunner(process, max_steps=settings.max_steps)

        if args.command == "start":
            data = _parse_json_arg(args.data, name="--data")
            if not isinstance(data, dict):
                raise argparse.ArgumentTypeError("--data must be a JSON object")
            results = runner.start(args.trigger_key, data)
            for result in results:
                store.save(result.instance)
                _print_result(result)
            if not results:
                print(f"No trigger listens on {args.trigger_key!r}")
            _print_reported(errors)
            return 0 if all(r.ok for r in results) else 1

        if args.command == "respond":
            instance = store.get(args.instance_id)
            if instance is None:
                raise InstanceNotFoundError(args.instance_id)
            response = _parse_json_arg(args.response, name="--response")
            result = runner.respond(instance, args.task_id, response, form_id=args.form_id)
            store.save(result.instance)
            _print_result(result)
            _print_reported(errors)
            return 0 if result.ok else 1

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except (InstanceNotFoundError, TaskNotFoundError) as e:
        logger.warning("Lookup failed", extra={"error": str(e)})
        print(f"Not found: {e}", file=sys.stderr)
        return 3

    except (ProcessError, ValidationError, ValueError, OSError, argparse.ArgumentTypeError) as e:
        # Definition, objects file or argument problems.
        logger.error("Invalid input", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
