from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from componenthost.core.components import ComponentRegistry
from componenthost.core.components.builtins import BuiltInComponents
from componenthost.core.components.cli import component_show_payload, components_list_lines
from componenthost.core.components.parser import JsonComponentParser
from componenthost.core.errors import ComponentHostError
from componenthost.core.events import EventLogger
from componenthost.core.logger import setup_logging
from componenthost.core.settings import SettingsFsPaths, SettingsStore
from componenthost.core.styles import StyleInjector


def build_registry(root: str) -> ComponentRegistry:
    fs = SettingsFsPaths(root=root)
    logger = setup_logging(fs.logs_dir)
    store = SettingsStore(fs=fs, logger=logger).load()
    return ComponentRegistry(
        store=store,
        parser=JsonComponentParser(logger=logger),
        builtins=BuiltInComponents(),
        style_injector=StyleInjector(logger=logger),
        event_logger=EventLogger(fs.audit_log),
        logger=logger,
    )


def _read_code(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="componenthost", description="Manage user components.")
    p.add_argument("--root", default=".", help="Host root holding config/ and logs/.")
    sub = p.add_subparsers(dest="command", required=True)

    p_install = sub.add_parser("install", help="Install or update a component from a manifest file ('-' for stdin).")
    p_install.add_argument("path")
    for cmd in ("uninstall", "toggle", "show"):
        sp = sub.add_parser(cmd)
        sp.add_argument("name", help="Component name or display name.")
    sub.add_parser("list")

    args = p.parse_args(argv)
    registry = build_registry(args.root)

    try:
        if args.command == "install":
            print(registry.install(_read_code(args.path), trace_id="cli").message)
        elif args.command == "uninstall":
            print(registry.uninstall(args.name, trace_id="cli").message)
        elif args.command == "toggle":
            print(registry.toggle(args.name, trace_id="cli"))
        elif args.command == "show":
            print(json.dumps(component_show_payload(registry=registry, name_or_display_name=args.name), indent=2, ensure_ascii=False))
        else:
            for line in components_list_lines(registry=registry):
                print(line)
    except ComponentHostError as e:
        print(e.user_message, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"{e.strerror or e}: {e.filename or ''}".rstrip(": "), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
