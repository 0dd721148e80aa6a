# src/pocket_props/cli.py

import argparse
import platform
import sys
from difflib import get_close_matches
from pathlib import Path

from .actions import get_metadata
from .config import load_and_validate_config, load_declarations
from .constants import DEFAULT_HINT_CUTOFF
from .describe import format_help
from .errors import MissingMandatoryProperties
from .guard import SensitiveValueGuard
from .meta import DESCRIPTION, PROGRAM_DISPLAY, PROGRAM_SCRIPT
from .registry import PropertyRegistry
from .resolver import ResolvedProperties, resolve
from .runtime import current_runtime
from .sources import default_sources, env_key, parse_overrides
from .utils import safe_log
from .utils_logs import LEVEL_ORDER, get_handler, get_logger, set_log_level


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Build known option strings: ["-v", "--verbose", "--log-level", ...]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # Argparse message for bad flags is typically
        # "unrecognized arguments: --descibe ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(
                    arg, known_opts, n=1, cutoff=DEFAULT_HINT_CUTOFF
                )
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(prog=PROGRAM_SCRIPT, description=DESCRIPTION)

    parser.add_argument("-c", "--config", help="Path to the property declaration file.")
    parser.add_argument(
        "-D",
        "--define",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set a property value (highest precedence). Repeatable.",
    )
    parser.add_argument(
        "--values",
        metavar="FILE",
        help="JSON file of project-level property values (below the environment).",
    )

    # --- Environment ---
    parser.add_argument(
        "--env-prefix",
        default=None,
        metavar="PREFIX",
        help="Prefix for environment variable names (e.g. BUILD → BUILD_DB_PASSWORD).",
    )
    parser.add_argument(
        "--no-env",
        dest="use_env",
        action="store_false",
        help="Do not read property values from the environment.",
    )

    parser.add_argument(
        "--describe",
        action="store_true",
        help="List the declared properties and exit.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Treat declaration warnings as errors.",
    )

    # --- Color ---
    color = parser.add_mutually_exclusive_group()
    color.add_argument(
        "--no-color",
        dest="use_color",
        action="store_const",
        const=False,
        help="Disable ANSI color output.",
    )
    color.add_argument(
        "--color",
        dest="use_color",
        action="store_const",
        const=True,
        help="Force-enable ANSI color output (overrides auto-detect).",
    )
    color.set_defaults(use_color=None)

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LEVEL_ORDER,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


def _print_resolved(resolved: ResolvedProperties) -> None:
    if not resolved:
        print("No properties declared.")
        return
    width = max(len(name) for name in resolved)
    for name, prop in resolved.items():
        # str(prop) goes through the guard
        print(f"{name.ljust(width)} = {prop} ({prop.origin})")


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:  # noqa: PLR0911
    logger = get_logger()  # init (use env + defaults)
    env_prefix = ""

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        if args.use_color is not None:
            current_runtime["use_color"] = args.use_color
        if args.log_level:
            set_log_level(args.log_level)

        logger.debug(
            "Runtime: Python %s (%s)\n    %s",
            platform.python_version(),
            platform.python_implementation(),
            sys.version.replace("\n", " "),
        )

        # --- Version flag ---
        if args.version:
            logger.info("%s %s", PROGRAM_DISPLAY, get_metadata())
            return 0

        # --- Load declarations ---
        cwd = Path.cwd().resolve()
        config_result = load_and_validate_config(args, cwd)
        if config_result is None:
            logger.error(
                "No property declarations found (.%s.jsonc); use --config PATH.",
                PROGRAM_SCRIPT,
            )
            return 1
        config_path, declarations, summary = config_result
        set_log_level(current_runtime["log_level"])
        logger.trace(
            "[CONFIG] log-level re-resolved from file: %s",
            current_runtime["log_level"],
        )

        registry = PropertyRegistry()
        load_declarations(declarations, registry, strict=summary.strict)
        env_prefix = args.env_prefix
        if env_prefix is None:
            env_prefix = declarations.get("env_prefix", "")

        # --- Help mode ---
        if args.describe:
            print(format_help(registry, env_prefix=env_prefix))
            return 0

        logger.debug("🔧 Using declarations: %s", config_path.name)

        # --- Resolve ---
        guard = SensitiveValueGuard()
        with guard.redacting(get_handler()):
            overrides = parse_overrides(args.define)
            sources = default_sources(
                registry,
                overrides=overrides,
                env_prefix=env_prefix,
                use_env=args.use_env,
                values_file=Path(args.values) if args.values else None,
            )
            for unknown in sorted(n for n in overrides if n not in registry):
                logger.warning("Ignoring value for undeclared property %r", unknown)

            resolved = resolve(registry, sources, guard=guard)
            _print_resolved(resolved)

    except MissingMandatoryProperties as e:
        logger.error("%s", e)
        logger.error(
            "   Pass them with -D NAME=VALUE or set them in the environment (%s).",
            ", ".join(env_key(n, env_prefix) for n in e.names),
        )
        return e.code

    except (FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        silent = getattr(e, "silent", False)
        if not silent:
            try:
                logger.error("%s", e)
            except Exception:  # noqa: BLE001
                safe_log(f"[FATAL] Logging failed while reporting: {e}")
        return getattr(e, "code", 1)

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.critical("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safe_log(f"[FATAL] Logging failed while reporting: {e}")

        return getattr(e, "code", 1)

    else:
        return 0
