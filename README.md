# hayride

Helpers for working with a Hayride installation from Python:

- `hayride.paths`: the Hayride home directory and morph lookup in its registry,
- `hayride.resolver`: loading component packages from the registry file system,
- `hayride.logger`: logging set-up for the workspace modules,
- `hayride.prompt`: prompt, message and option models with JSON round trips,
- `hayride.chat`: building generate requests and reading their responses,
- `hayride.sidebar`: grouping past chats by age.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Finding morphs

Morphs are stored under `<registry>/<package>/<version>/<name>.wasm`.
An identifier has the form `package:name@version`; when the version is
left out, the subdirectory with the highest semantic version is used.

```python
from hayride.paths import default_hayride_dir, find_morph_path, parse_identifier

registry = default_hayride_dir() / "registry" / "morphs"
parse_identifier("hayride-core:cli@0.0.1")   # ("hayride-core", "cli", "0.0.1")
parse_identifier("hayride-core:cli")         # ("hayride-core", "cli", None)
wasm = find_morph_path(registry, "hayride-core:cli")
```

`default_hayride_dir()` is `~/.hayride`, or `%APPDATA%\.hayride` on
Windows. `find_morph_path` returns an absolute path to an existing file.
An identifier with no `:` raises `ValueError`; a package directory with
no version subdirectories raises `LookupError`; a missing directory or
file raises `FileNotFoundError`.

## Resolving packages

```python
from hayride.resolver import PackageKey, PackageResolver, resolve_morph_path

resolver = PackageResolver(registry)
packages = resolver.resolve({PackageKey("example:component"): None})
```

Keys map to source spans (any value, `None` is fine); the result maps
keys to the package bytes. A key `ns:name` is looked up at
`<root>/ns/name.wasm`, and with a version at `<root>/ns/<version>/name.wasm`.

- `HayridePackageResolver(root, overrides=None, error_on_unknown=False)`
  skips keys with no file, or raises `UnknownPackageError` when
  `error_on_unknown` is set. An override path is used for an unversioned
  key of that name and must exist, else `PackageResolutionFailure`.
- `PackageResolver(directory, overrides=None)` raises `UnknownPackageError`
  for the first key it cannot find.
- Both error types derive from `ResolutionError`, which carries `name`
  and `span`.
- `append_extension(path, "wasm")` turns `0.0.1` into `0.0.1.wasm`.
- `resolve_morph_path(registry, morph)` accepts either a morph identifier
  or a plain file path and raises `FileNotFoundError` if neither exists.

## Logging

```python
from hayride.logger import set_log_path, init_logger

set_log_path(default_hayride_dir() / "logs" / "hayride.log")
init_logger("debug")
```

`set_log_path` may be called once; a second call raises `RuntimeError`.
`init_logger` can be called again to change the level; it replaces its
handler. Output goes to the log file (its directory is created) or, with
no path set, to stderr. The root logger is set to `WARNING`; the
workspace modules named by `workspace_crates(manifest_dir)` log at the
chosen level. The manifest directory comes from the environment variable
named in `hayride.logger.MANIFEST_DIR_ENV`, defaulting to `.`.
`parse_level` accepts `error`, `warn`, `info`, `debug` and `trace`
(case-insensitive); anything else gives `INFO`.

## Prompts and chat

```python
from hayride.prompt import default_prompt, prompt_to_json, prompt_from_json
from hayride.chat import ChatMessage, build_generate_request, record_response

prompt = default_prompt()
assert prompt_from_json(prompt_to_json(prompt)) == prompt

request = build_generate_request(prompt, "Hello")
history = [ChatMessage(sent="Hello")]
record_response(history, {"error": "", "data": {"messages": [
    {"content": [{"text": {"text": "Hi there", "content_type": "text"}}]},
]}})
history[-1].response   # "Hi there"
```

- `Role` values serialise as integers; `role_from_int` decodes values
  0 to 255, giving `Role.UNKNOWN` for unrecognised ones.
- `prompt_from_json` requires every field and raises `ValueError` for a
  missing or ill-typed one.
- `default_prompt()` uses the agent `tool_agent`, a context and batch of
  20000, at most 2000 predicted tokens, `top_k` 20 and `top_p` 0.9.
- `prompt_metadata` lists the options and agent as ordered text pairs.
- `build_generate_request` raises `ValueError` for empty text.
- `concatenate_response` joins the first text of each message with spaces.
- `record_response` raises `RuntimeError` when the response has an error
  and `ValueError` when it does not hold messages.

## Sidebar

`group_chats(chats, today=None)` splits `SidebarChat` items into chats
from exactly yesterday, other chats newer than seven days ago, and the
rest, keeping their order. `sample_chats(today=None)` returns a fixed
placeholder history. `today` defaults to the current UTC date.

## What this package does not do

It has no command to start, does not run or compose components, does
not send requests over the network and has no user interface. It
provides the lookup, resolution, logging and data-model pieces only.