#!/usr/bin/env python3
"""CodeCraft - request to application generation pipeline.

Usage:
    python main.py generate --prompt "crée une todo list"
    python main.py generate --prompt "..." --mode merge --out ./projects
    python main.py generate --prompt "..." --defaults      # answer questions with defaults
    python main.py plan --prompt "an e-commerce shop with stripe"
    python main.py extract --response reply.txt --request "react app with express"
    python main.py list-roles
"""

import argparse
import logging
import os
import sys

from core.errors import PipelineError
from core.orchestrator import MODES, Orchestrator
from core.quality import validation_report_text
from manager.agent import ManagerAgent
from utils.extractor import extract_artifact
from utils.folder_naming import write_project

logger = logging.getLogger("codecraft")


def _print_artifact(artifact, out_dir=None):
    if artifact.kind == "multi":
        print(f"Project:  {artifact.name}{'  (salvaged)' if artifact.salvaged else ''}")
        print(f"Entry:    {artifact.entry_file}")
        if artifact.setup_notes:
            print(f"Setup:    {artifact.setup_notes}")
        print(f"\n{len(artifact.files)} file(s):")
        for f in artifact.files:
            print(f"  {f.path}  ({f.language})")
        if out_dir:
            print(f"\nWritten to {write_project(artifact, out_dir)}")
        return

    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
        path = os.path.join(out_dir, "index.html")
        with open(path, "w", encoding="utf-8") as f:
            f.write(artifact.content)
        print(f"Written to {path}")
    else:
        print(artifact.content)


def _print_roles(results):
    print("\nRoles:")
    for r in results:
        status = "ok" if r.succeeded else f"FAILED ({r.error_detail})"
        issues = f", {len(r.issues)} issue(s)" if r.issues else ""
        print(f"  {r.role_id:14s} {r.elapsed_ms:6d} ms  {status}{issues}")


def _manager():
    return ManagerAgent(Orchestrator(logger=logger))


def cmd_generate(args):
    manager = _manager()
    response = manager.handle(args.prompt, mode=args.mode)

    if response.kind == "clarification":
        print(response.message)
        if args.defaults:
            answer = "use defaults"
        else:
            try:
                answer = input("\n> ").strip() or "use defaults"
            except (EOFError, KeyboardInterrupt):
                print()
                answer = "use defaults"
        response = manager.handle(answer, mode=args.mode)

    if response.kind == "answer":
        print(response.message)
        return

    print(response.message)
    if response.role_results:
        _print_roles(response.role_results)
    if response.validation is not None and args.verbose:
        print("\n" + validation_report_text(response.validation))
    print()
    _print_artifact(response.artifact, args.out)


def cmd_plan(args):
    response = _manager().orchestrator.plan(args.prompt)
    record = response.requirements
    print(f"Intent:     {response.intent.kind} ({response.intent.confidence})")
    print(f"App type:   {record.app_type or '-'}")
    print(f"Design:     {record.design or '-'}")
    print(f"Features:   {', '.join(sorted(record.features)) or '-'}")
    print(f"Stack:      {', '.join(record.stack)}")
    print(f"Complexity: {record.complexity}")
    print(f"\nPlan: {response.plan.mode}, ~{response.plan.estimated_duration_seconds}s")
    for role in response.plan.roles:
        print(f"  [{role.priority}] {role.id:14s} {role.display_name}")


def cmd_extract(args):
    with open(args.response, encoding="utf-8") as f:
        raw = f.read()
    artifact = extract_artifact(raw, args.request, logger=logger)
    _print_artifact(artifact, args.out)


def cmd_list_roles(args):
    print("Available roles:")
    for role_id, name, priority in _manager().list_roles():
        print(f"  [{priority}] {role_id:14s} - {name}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="codecraft",
        description="Turn a free-text application request into a generated artifact",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging and validation report")
    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser("generate", help="Generate an application")
    gen_parser.add_argument("--prompt", required=True, help="Natural language request")
    gen_parser.add_argument("--mode", choices=MODES, help="auto (default), fast or merge")
    gen_parser.add_argument("--out", help="Write the artifact under this directory")
    gen_parser.add_argument("--defaults", action="store_true",
                            help="Answer any clarification question with the defaults")

    plan_parser = subparsers.add_parser("plan", help="Show requirements and role plan, no generation")
    plan_parser.add_argument("--prompt", required=True, help="Natural language request")

    extract_parser = subparsers.add_parser("extract", help="Extract an artifact from a saved response")
    extract_parser.add_argument("--response", required=True, help="File holding the raw model response")
    extract_parser.add_argument("--request", default="", help="The request that produced it")
    extract_parser.add_argument("--out", help="Write the artifact under this directory")

    subparsers.add_parser("list-roles", help="List the role catalog")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "generate": cmd_generate,
        "plan": cmd_plan,
        "extract": cmd_extract,
        "list-roles": cmd_list_roles,
    }
    if args.command not in commands:
        parser.print_help()
        sys.exit(1)

    try:
        commands[args.command](args)
    except PipelineError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
