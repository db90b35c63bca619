# plumbline

plumbline is a set of building blocks for judging how far a repository has
come along the AI Codebase Maturity Model (ACMM). The model ranks a codebase
in five levels by the feedback loops it has in place:

1. **Assisted** – open loop; the human drives every interaction.
2. **Instructed** – conventions are written down for agents (CLAUDE.md,
   AGENTS.md, contributor guides, PR templates).
3. **Measured** – coverage gates, nightly suites and other metrics report
   on agent and CI behaviour.
4. **Adaptive** – the system acts on its own metrics.
5. **Self-Sustaining** – issues turn into pull requests; guidance updates
   itself.

The package provides: strict loading of the `.plumbline.yml` configuration
file, a safe executor for file-scaffolding fix plans, a runner for external
signal plugins, the published JSON Schemas, long-form help topics, and a
small command line that prints the latter two along with version
information.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Command line

Installing the package provides the `plumbline` command.

```
plumbline                    # overview and list of subcommands
plumbline --help             # the same

plumbline version            # build version, commit, signal-set version, schema id
plumbline version --json     # the same as a JSON object

plumbline help               # index of long-form topics
plumbline help scoring       # one topic, printed as Markdown

plumbline schema verdict         # JSON Schema for an assessment verdict
plumbline schema signal-result   # JSON Schema for one signal's result
plumbline schema event           # JSON Schema for NDJSON progress events
plumbline schema config          # JSON Schema for .plumbline.yml
```

The help topics are `agents`, `ci`, `compatibility`, `config`, `fix`,
`levels`, `output`, `profiles`, `scoring` and `signals`. Schemas are JSON
Schema draft 2020-12 with `$id` values under `plumbline/v1/`.

### Exit codes

| Code | Meaning                                            |
|------|----------------------------------------------------|
| 0    | success                                            |
| 2    | could not run (unknown help topic or schema name)  |
| 3    | usage error (unknown flag, missing argument)       |

Errors are written to standard error as a single `error: ...` line. The
`plumbline.cli.ExitCode` enum also defines 1 (gate failed) and 4 (internal
error), which no current command returns.

From Python, `plumbline.cli.run(argv, stdout, stderr)` runs the command line
against any text streams and returns the exit code; `plumbline.cli.main()`
does the same on the process streams and exits.

The same content is available directly: `plumbline.helptopics.topic_names()`,
`get_topic(name)` and `render_topic_index()`; `plumbline.schemas.schema_names()`
and `get_schema(name)` (JSON text). Unknown names raise `KeyError`.
`plumbline.buildinfo.describe()` returns the version metadata as a dict.

## Configuration: `.plumbline.yml`

An optional file at the repository root. Every key is optional, and
unknown keys are a hard error so that a typo can never silently disable
a signal.

```yaml
profile: default              # default | go-only | frontend-only | oss-cncf

thresholds:
  pass: 0.7                   # must lie in [0, 1]

signals:
  l3.user-feedback:
    enabled: false            # mark a signal as switched off
    args: {}                  # free-form per-signal settings

paths:
  ignore:
    - vendor/
    - node_modules/
```

`plumbline.config` reads and validates the file:

```python
from plumbline import config

cfg = config.load_default(".")        # None when there is no .plumbline.yml
if cfg is not None:
    print(cfg.disabled_signals())     # IDs with enabled: false
```

`config.load(path)` reads an explicit path and raises `ConfigError` if the
file is missing; `config.parse(data)` validates bytes or text already in
memory. Empty input gives a default `Config`. Invalid YAML, unknown keys,
wrong value types, an unknown profile or a threshold outside `[0, 1]` all
raise `ConfigError`.

## Applying fixes safely

`plumbline.fix.apply(repo_root, plan, dry_run=False)` carries out a
`FixPlan` made of `FixOp` operations (kind, repo-relative path, body)
against a repository. `repo_root` must be an absolute path to an existing
directory. The function enforces:

- paths must be relative and stay inside the repository root;
- `FixOpKind.CREATE_FILE` refuses to overwrite an existing file and creates
  missing parent directories;
- `FixOpKind.APPEND_FILE` requires the target file to exist already and
  writes a newline before the appended body;
- a dry run reports what would happen without touching the disk;
- unknown operation kinds are rejected.

Violations raise `FixError`. The returned `ApplyResult` lists one
`OpResult` per operation (kind, absolute path, whether it wrote, body size,
whether the file existed) and converts to plain data with `to_dict()`.

## External signal plugins

A plugin is an executable that, run as `<path> --repo <repo-root> --json`,
prints signal-result JSON on standard output – a single object, one object
per line, or a JSON array.

```python
from plumbline import plugin

spec = plugin.parse_spec("./my-plugin@<sha256-of-the-executable>")
loaded = plugin.load(spec, "/path/to/repo")
print(loaded.id, loaded.level, loaded.family, loaded.title)
result = loaded.detect("/path/to/repo")
```

When a SHA-256 is pinned in the spec, the executable is hashed first and
refused on mismatch (`plugin.verify_checksum(spec)` does this on its own).
`load` runs the plugin once and takes its id, level, family and title from
the first result, so a broken plugin raises `PluginError` at start-up. A
failure during a later `detect` call comes back as a `missing` result whose
notes explain what went wrong. `plugin.parse_signal_results(text)` parses
plugin output into `SignalResult` objects.

## What this package does not do

There are no built-in signal detectors, no repository scanner and no
scoring. As a result the command line has only `help`, `schema` and
`version`: there is no command that assesses a repository, inspects or
lists signals, applies fixes from the command line, installs agent guides,
writes reports or history files, or shows an interactive screen. Some help
topics describe those workflows; the commands they mention are not
provided here.