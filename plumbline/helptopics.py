"""Long-form help topics shown by ``plumbline help <topic>``.

Bodies are plain markdown so that a tool caller can ingest them directly.
"""

from __future__ import annotations

_LEVELS = """\
# The ACMM levels

ACMM (the AI Codebase Maturity Model) ranks a repository by the shape of its
feedback loops, meaning which loops are present and how they connect. It does
not rank by how autonomous the AI tooling is. The levels stack: reaching level
N needs the artifacts of level N-1.

## L1 Assisted: no loop at all
A person starts every exchange and the AI behaves like a clever autocomplete
that forgets everything between sessions. Every repository starts on this floor.

## L2 Instructed: person to AI
Conventions are written down in instruction files such as CLAUDE.md,
.github/copilot-instructions.md, contributor guides and PR templates, so the
AI produces consistent output from one session to the next.

## L3 Measured: AI to metrics to person
Numbers describe how agents and CI behave: coverage gates on pull requests,
nightly compliance runs, flaky-test analysis, error monitoring, NPS and
acceptance-rate logs.

## L4 Adaptive: the loop closes on its own
The system reacts to its own metrics: configs that rewrite themselves,
automatic triage, blocks triggered by thresholds, concurrent agents working in
separate worktrees, and recovery from errors.

## L5 Self-Sustaining: the code is the policy
Issues become pull requests without a person in between, guidance is refreshed
from analysis of merged work, and several repositories are orchestrated
together. People steer; AI carries the work out.

'plumbline help scoring' explains how the level is computed.
"""

_SIGNALS = """\
# About signals

Each signal is a single detector. It has a stable ID such as
'l2.agent-instructions', sits at exactly one ACMM level between 2 and 5, and
reports a status, a score, a confidence, a method and its evidence.

## Scores come in four steps only

Detectors never make up values in between these four:

| Score | Status  | What it means                  |
|-------|---------|--------------------------------|
| 0.0   | missing | Nothing there.                 |
| 0.33  | partial | Only named or stubbed.         |
| 0.67  | partial | There, but not complete.       |
| 1.0   | found   | Completely wired up.           |

## Confidence

Confidence is separate from the score. It says how far the result can be
trusted:

- **high**: an AST query or logic across several files; hard to fool.
- **medium**: a content pattern matched something substantial.
- **low**: only a filename matched, so false positives are possible.

A strict CI gate passes '--min-confidence high' to 'plumbline assess'; the
'plumbline help scoring' page has the details.

## Method

The way a detector reached its answer:
- **filename**: the name alone matched.
- **content-regex**: a pattern matched inside the file.
- **ast**: a query over a parsed tree, for example a GitHub Actions workflow.
- **cross-file**: several files were read together.

'plumbline signals' prints the whole registry.
"""

_SCORING = """\
# How scoring works

## Score of one level
The score of level L is the mean score of its signals, leaving out those with
status na, after the min-confidence downgrade has been applied. A level with no
registered signals scores 0, because there is no evidence to pass it on.

## Levels cannot be skipped
The verdict is the highest level L for which every level from 2 up to L reaches
the pass threshold. Climbing stops at the first level that falls short, so a
repository with an excellent L3 but a missing L2 stays at L1.

## Pass threshold
0.7 unless .plumbline.yml sets another value; a '--threshold' flag is planned.

## Downgrade for low confidence
A signal whose score is below 1.0 and whose confidence is under the requested
minimum counts as 0.0 in the verdict. A full score of 1.0 always counts,
whatever its confidence. CI gates use '--min-confidence high' to deny credit to
weak or filename-only matches.

## next_gap
next_gap lists the signals one level above the verdict that are not yet found,
ordered by ID. It answers the practical question of what to add next.
"""

_OUTPUT = """\
# Ways to read the results

Each format has a published schema; see 'plumbline schema <name>'.

## Plain text (default)
'plumbline assess' prints a single screen: bars per level, the next-gap list
and a hint pointing at --json.

## JSON via --json
'plumbline assess --json' writes the complete report, described by the
'verdict' schema. The layout is stable and meant for programs.

## Markdown via --report markdown
'plumbline assess --report markdown --out maturity.md' writes a summary you can
commit alongside the code.

## Event stream via --events ndjson
While scanning, one JSON object per line goes to stderr, described by the
'event' schema. For example:

  plumbline assess --json --events ndjson 2>events.log >verdict.json

## Structured output everywhere
inspect, signals, explain and schema all accept --json as well, for the benefit
of tool callers; 'plumbline help agents' has more.
"""

_CONFIG = """\
# The .plumbline.yml file

The file is optional and lives at the repository root. Every key in it is
optional too. Its schema is printed by 'plumbline schema config'.

  profile: default        # one of default, go-only, frontend-only, oss-cncf
  thresholds:
    pass: 0.7             # level pass threshold, between 0 and 1
  signals:
    l3.user-feedback:
      enabled: false      # turns this signal off
  paths:
    ignore:
      - vendor/
      - node_modules/

A key the tool does not know is an error, so a misspelt key can never quietly
switch a signal off.
"""

_CI = """\
# Running plumbline in CI

## GitHub Actions

  name: ACMM gate
  on: pull_request
  jobs:
    plumbline:
      runs-on: ubuntu-latest
      steps:
        - uses: actions/checkout@v4
        - uses: actions/setup-python@v5
          with:
            python-version: "3.12"
        - run: pip install plumbline
        - run: plumbline assess --fail-below 3 --quiet

Exit codes:
  0  scan ok, gate passed (or no gate set)
  1  scan ok, gate failed (level < --fail-below)
  2  could not run (path / IO error)
  3  configuration error

To keep the verdict from drifting when the tool is upgraded, pin the signal set:
  plumbline assess --fail-below 3 --signal-set v1
"""

_AGENTS = """\
# Notes for LLM tool callers

plumbline is built to be called from an LLM tool harness. A good order of calls:

1. **Fetch the contract.** Run 'plumbline schema verdict', 'plumbline schema
   event' and 'plumbline schema signal-result', and keep the results.

2. **List the signals.** Run 'plumbline signals --json' and read the array of
   signal descriptors it prints.

3. **Assess.** Run:
     plumbline assess --json --events ndjson 2>events.log >verdict.json
   stdout holds the final report (verdict schema); stderr holds one JSON event
   per line.

4. **Look into what is missing.** For every id in verdict.next_gap run:
     plumbline inspect <id> --json
   which prints one signal-result object.

5. **Handle failures.** The exit code is part of the contract:
     0  success
     1  the gate failed
     2  the command could not run
     3  the configuration is wrong
   On any non-zero exit stderr carries an 'error: ...' line, often with a
   'Hint: ...' line naming the command that recovers.

6. **What stays stable.**
   - Signal IDs do not change; a rename goes through a deprecation period.
   - Schema $id values carry a version (plumbline/v1/...); breaking changes
     bump the major version.
   - Exit code values never change in a patch release.
"""

_PROFILES = """\
# Profiles

A profile is a named preset that switches parts of the signal catalog on or off.

## default
Every registered signal is on. Used when no profile is given.

## go-only
Switches off signals aimed at JavaScript and TypeScript, such as ESLint or
Prettier checks, so that a pure Go repository is not marked down for them.

## frontend-only
Switches off signals aimed at back-end code, for web front-ends alone.

## oss-cncf
Adds stricter rules for CNCF-style open-source projects: a tighter coverage
gate, and an accessibility nightly suite becomes a requirement for L3.

For now only 'default' is shipped; the other presets arrive in a later milestone.
"""

_FIX = """\
# Fixes

plumbline can create or extend the L2 instruction artifacts of a repository,
the files that lift a repository from L1 Assisted to L2 Instructed.

Fixes are the **only** way plumbline ever writes into the repository it looks
at; every other command only reads.

## Applying a fix

### From the command line

  # See what would be written, without writing it.
  plumbline fix l2.agent-instructions

  # Write it.
  plumbline fix l2.agent-instructions --apply

  # Give the inputs straight away.
  plumbline fix l2.agent-instructions --apply \\
      --input "project_summary=A CLI for X." \\
      --input "conventions=- Use UV for Python envs.\\n- No raw SQL."

### From the interactive screen

On the detail screen of a signal that can be fixed, press **a**. You are asked
for any inputs, shown a preview, and asked to confirm before anything is
written. Fixable signals carry a **✚** mark in the results list.

## What is always enforced

- Every path in a plan is relative and must stay inside the repository root.
- `create-file` never replaces a file that already exists.
- `append-file` only works on a file that already exists.
- Nothing is written without `--apply`; a dry run is the default.
- Operation kinds that are not known are refused.

## Signals with a fix

For now the L2 catalog, which scaffolds files:

- l2.agent-instructions   the chosen agent file (CLAUDE.md, AGENTS.md and so on)
- l2.contributor-guide    CONTRIBUTING.md
- l2.pr-template          .github/pull_request_template.md
- l2.commit-rules         .gitmessage

Fixes for L3 and above, which would scaffold workflows, are postponed until
merging into an existing workflow can be done safely.

## When to write it yourself

- If you already have instruction files of your own, run a dry run, read the
  proposal and edit by hand; a fix is a starting point.
- plumbline appends rather than overwriting your prose, but what it appends is
  generic template text.
"""

_COMPATIBILITY = """\
# Compatibility and signal-set versions

Each verdict records two versions:
  tool_version        the release of the tool, for example 1.4.2
  signal_set_version  the major version of the rules, for example v2

## Inside one signal-set major version
- Signals may be added: a repository that passed can gain credit but not lose it.
- A rule may only be relaxed, never made stricter.

## What forces a new major version
- Making a detection rule stricter.
- Removing a signal or giving it a new name.

## Pinning in CI
Pass '--signal-set v2' so an upgrade of plumbline cannot quietly change the
verdict:

  plumbline assess --fail-below 3 --signal-set v2

If the pinned version is not available, because it was retired or the tool is
too old or too new, the run fails with exit code 3 and a message on migrating.

## Renamed IDs from v1
These v1 IDs were renamed. For one minor version they are still accepted; a
deprecation warning goes to stderr and the ID is rewritten to the new name.
Gates pinned to '--signal-set v1' should move over before the aliases go.

  l2.claude-md             now l2.agent-instructions
  l2.copilot-instructions  now l2.agent-instructions

Why: any single one of CLAUDE.md, AGENTS.md, .github/copilot-instructions.md,
.cursorrules or .windsurfrules satisfies the signal. Most teams work with one
agent, and asking for instructions aimed at several was too strict.
'--quiet' silences the warning once you know about the rename.
"""

_TOPICS: dict[str, str] = {
    "levels": _LEVELS,
    "signals": _SIGNALS,
    "scoring": _SCORING,
    "output": _OUTPUT,
    "config": _CONFIG,
    "ci": _CI,
    "agents": _AGENTS,
    "profiles": _PROFILES,
    "compatibility": _COMPATIBILITY,
    "fix": _FIX,
}


def topic_names() -> list[str]:
    """Names of every help topic, sorted alphabetically."""
    return sorted(_TOPICS)


def get_topic(name: str) -> str:
    """Return the markdown body of a topic; unknown names raise KeyError."""
    try:
        return _TOPICS[name]
    except KeyError:
        raise KeyError(
            f"unknown topic: {name!r}. Run 'plumbline help' for the list"
        ) from None


def render_topic_index() -> str:
    """The text printed by a bare ``plumbline help``."""
    lines = ["plumbline help — topical guides", "", "Topics:"]
    lines.extend(f"  plumbline help {name}" for name in topic_names())
    lines.append("")
    lines.append("Run 'plumbline <command> --help' for per-command flag reference.")
    return "\n".join(lines) + "\n"