"""
Typed builders for the read-only git queries the engine issues.

Every builder validates the refs and paths it is given and returns a
GitCommand holding an argument vector. Nothing here ever builds a shell
string.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from githerald.models.base import WhitespacePolicy

# Field and record separators for formatted output; neither appears in refs or subjects.
FIELD_SEPARATOR = "\x1f"
RECORD_SEPARATOR = "\x1e"

# Print non-ASCII path bytes as they are instead of octal-escaped and quoted.
UNQUOTED_PATHS = ("core.quotePath=false",)

TAG_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("tagged_object", "%(*objectname)"),
    ("tagged_type", "%(*objecttype)"),
    ("tagger_name", "%(taggername)"),
    ("tagger_email", "%(taggeremail)"),
    ("subject", "%(subject)"),
    ("body", "%(contents)"),
)


@dataclass(frozen=True)
class GitCommand:
    """A git subcommand, its arguments and any ``-c key=value`` overrides."""

    args: Tuple[str, ...]
    config: Tuple[str, ...] = ()

    @property
    def argv(self) -> Tuple[str, ...]:
        overrides: Tuple[str, ...] = ()
        for setting in self.config:
            overrides += ("-c", setting)
        return ("git",) + overrides + self.args

    def __str__(self) -> str:
        return " ".join(self.argv)


def _check_ref(value: str, what: str = "revision") -> str:
    if not isinstance(value, str):
        raise ValueError(f"{what} must be a string, got {type(value).__name__}")
    value = value.strip()
    if not value:
        raise ValueError(f"{what} must not be empty")
    if value.startswith("-"):
        raise ValueError(f"{what} must not start with '-': {value!r}")
    if any(ch in value for ch in ("\0", "\n", "\r", " ", "\t")):
        raise ValueError(f"{what} contains whitespace or control characters: {value!r}")
    return value


def _check_path(value: str) -> str:
    if not value or "\0" in value or "\n" in value:
        raise ValueError(f"Invalid path: {value!r}")
    return value


def _rename_option(similarity_threshold: float) -> str:
    if not 0 <= similarity_threshold <= 1:
        raise ValueError(f"similarity threshold must be within 0..1, got {similarity_threshold}")
    return f"-M{round(similarity_threshold * 100)}%"


def _whitespace_options(whitespace: Optional[WhitespacePolicy]) -> Tuple[str, ...]:
    if whitespace is None:
        return ()
    policy = WhitespacePolicy(whitespace)
    return ("-w",) if policy is WhitespacePolicy.ALL else ("-b",)


def rev_parse(ref: str, short: bool = False) -> GitCommand:
    args = ["rev-parse", "--verify", "--quiet"]
    if short:
        args.append("--short")
    args.append(_check_ref(ref))
    return GitCommand(tuple(args))


def rev_parse_full_name(ref: str) -> GitCommand:
    return GitCommand(("rev-parse", "--symbolic-full-name", _check_ref(ref)))


def for_each_ref_heads() -> GitCommand:
    """Every local branch as ``refname<FS>objectname``, one per line."""
    return GitCommand(("for-each-ref", "--format=%(refname)%1f%(objectname)", "refs/heads"))


def rev_parse_dir(option: str) -> GitCommand:
    if option not in ("--git-dir", "--show-toplevel"):
        raise ValueError(f"Unsupported rev-parse option: {option}")
    return GitCommand(("rev-parse", option))


def rev_list(include: Iterable[str], exclude: Iterable[str] = (), reverse: bool = False) -> GitCommand:
    """List commits reachable from ``include`` and from none of ``exclude``."""
    positive = [_check_ref(rev) for rev in include]
    if not positive:
        raise ValueError("rev-list needs at least one positive revision")
    args = ["rev-list"]
    if reverse:
        args.append("--reverse")
    args.extend(f"^{_check_ref(rev)}" for rev in exclude)
    args.extend(positive)
    return GitCommand(tuple(args))


def cat_file_type(ref: str) -> GitCommand:
    return GitCommand(("cat-file", "-t", _check_ref(ref)))


def describe(ref: str, abbrev_only: bool = False) -> GitCommand:
    if abbrev_only:
        return GitCommand(("describe", "--abbrev=0", _check_ref(ref)))
    return GitCommand(("describe", "--always", _check_ref(ref)))


def log_name_status(
    rev1: str,
    rev2: str,
    similarity_threshold: float = 0.5,
    whitespace: Optional[WhitespacePolicy] = None,
) -> GitCommand:
    """One line per commit followed by its name/status rows, newest commit first."""
    return GitCommand(
        (
            "log",
            f"{_check_ref(rev1)}..{_check_ref(rev2)}",
            "--name-status",
            "--pretty=oneline",
            _rename_option(similarity_threshold),
        )
        + _whitespace_options(whitespace),
        config=UNQUOTED_PATHS,
    )


def log_subjects(rev1: str, rev2: str) -> GitCommand:
    """Commit id and subject per line, oldest first."""
    return GitCommand(
        (
            "log",
            "--reverse",
            f"--format=%H{FIELD_SEPARATOR}%s",
            f"{_check_ref(rev1)}..{_check_ref(rev2)}",
        )
    )


def log_fuller(rev1: str, rev2: str) -> GitCommand:
    return GitCommand(("log", "--pretty=fuller", f"{_check_ref(rev1)}..{_check_ref(rev2)}"))


def show(
    rev: str,
    similarity_threshold: float = 0.5,
    whitespace: Optional[WhitespacePolicy] = None,
) -> GitCommand:
    return GitCommand(
        ("show", _check_ref(rev), "--date=rfc2822", "--pretty=fuller", _rename_option(similarity_threshold))
        + _whitespace_options(whitespace)
    )


def show_blob(rev: str, path: str) -> GitCommand:
    return GitCommand(("cat-file", "blob", f"{_check_ref(rev)}:{_check_path(path)}"))


def for_each_ref_tag(ref_name: str) -> GitCommand:
    """Fixed-key tag metadata, fields and records separated by control characters."""
    fields = "%1f".join(placeholder for _, placeholder in TAG_FIELDS)
    return GitCommand(("for-each-ref", f"--format={fields}%1e", _check_ref(ref_name, "ref name")))


def config_get(key: str) -> GitCommand:
    return GitCommand(("config", "--get", _check_ref(key, "config key")))
