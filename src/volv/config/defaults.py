"""Starter .volv.toml template."""

DEFAULT_TOML = """\
# volv configuration
version = "1.0"

[paths]
# home = "~/.volv"          # holds cache/, reports/ and tmp/

[git]
default_branch = "master"
timeout = 600               # seconds allowed for each git command

[scan]
exclude = [".git"]          # directory or file names skipped at any depth
max_workers = 8             # concurrent stat calls within one commit
follow_symlinks = false

[report]
format = "json"             # json | yaml — per-commit artifact format
indent = 2
# hash_length = 8           # truncate artifact names; unset = full hash
write_aggregate = true
"""
