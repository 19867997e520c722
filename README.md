# accessmodel

Building blocks for access control: an INI-style configuration reader,
an in-memory model holding request, policy, role, effect and matcher
definitions together with their policy rules, merging of per-rule
effects into one decision, and policy storage in text files with
optional filtering.

## Installation

```
pip install accessmodel
```

## Defining a model

A model can be loaded from a `.conf` file with `Model.from_file(path)`
or from text:

```python
from accessmodel.model import Model

model = Model.from_text("""
[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act

[role_definition]
g = _, _

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = g(r.sub, p.sub) && r.obj == p.obj && r.act == p.act
""")
```

or built up by hand:

```python
model = Model()
model.add_def("r", "r", "sub, obj, act")
model.add_def("p", "p", "sub, obj, act")
model.add_def("e", "e", "some(where (p.eft == allow))")
model.add_def("m", "m", "r.sub == p.sub && r.obj == p.obj && r.act == p.act")
```

A `Model` is a dictionary from section (`"r"`, `"p"`, `"g"`, `"e"`,
`"m"`) to key to `Assertion`. Request and policy definitions are split
into tokens such as `r_sub`; in other sections `r.sub`-style attribute
access is rewritten as `r_sub` and a trailing `#` comment is dropped.
Numbered keys (`p2`, `g2`, ...) are read from files as well.

## Managing policy rules

```python
model.add_policy("p", "p", ["alice", "data1", "read"])      # True
model.has_policy("p", "p", ["alice", "data1", "read"])      # True
model.get_filtered_policy("p", "p", 0, "alice")             # [["alice", "data1", "read"]]
model.get_values_for_field_in_policy("p", "p", 0)           # ["alice"]
model.remove_filtered_policy("p", "p", 1, "data1")          # True
```

An empty string in a filter matches any value. `add_policy` returns
`False` for a rule already present, `remove_policy` returns `False` for
one that is absent, and `clear_policy` empties every `p` and `g` policy.

`Model.build_role_links(rm)` passes each grouping rule to `rm.add_link`
(with 2 to 4 fields, as the role definition's count of `_` says) and then
calls `rm.print_roles()`. A malformed role definition raises
`RoleDefinitionError`.

## Loading and saving policy files

Policy files hold one rule per line, the policy type first; empty lines
and lines starting with `#` are skipped:

```
p, alice, data1, read
g, alice, data2_admin
```

```python
from accessmodel.file_adapter import FileAdapter, FilteredFileAdapter, Filter

adapter = FileAdapter("policy.csv")
adapter.load_policy(model)
adapter.save_policy(model)

filtered = FilteredFileAdapter("policy.csv")
filtered.load_filtered_policy(model, Filter(p=["alice"]))
filtered.is_filtered()   # True; save_policy now raises PolicyFileError
```

An empty file path raises `PolicyFileError`. The `Adapter`,
`FilteredAdapter` and `Watcher` base classes in `accessmodel.persist`
describe what other storage back ends and change notifiers provide;
`load_policy_line(line, model)` adds a single text line to a model.

## Merging effects

```python
from accessmodel.effect import DefaultEffector, Effect

DefaultEffector().merge_effects(
    "some(where (p_eft == allow))",
    [Effect.INDETERMINATE, Effect.ALLOW],
    [0.0, 0.0],
)  # True
```

The supported expressions are `some(where (p_eft == allow))`,
`!some(where (p_eft == deny))`,
`some(where (p_eft == allow)) && !some(where (p_eft == deny))` and
`priority(p_eft) || deny`; any other raises `UnsupportedEffectError`.

## Configuration files

```python
from accessmodel.config import Config

cfg = Config.from_text("[server]\nport = 8080\n")
cfg.get_int("server::port")   # 8080
```

Keys are `section::option`, or a bare option for the `default` section.
Lines ending in `\` continue on the next line; `#` and `;` start
comments. `get`, `get_strings`, `get_bool`, `get_int`, `get_float` and
`set` read and write values; bad input raises `ConfigError`.

## Logging

Messages go through a replaceable logger, off by default. The default
logger writes at INFO level to the standard `logging` logger named
`accessmodel`:

```python
from accessmodel.logger import get_logger, set_logger

get_logger().enable_log(True)
```

Any subclass of `accessmodel.logger.Logger` can be installed with
`set_logger`.

## What this package does not do

- It does not evaluate matcher expressions or decide requests; it holds
  models and policies and merges effects that a caller has worked out.
- It has no role manager. `build_role_links` needs one supplied by the
  caller; `accessmodel.errors` holds the exceptions such a role manager
  may raise.
- `FileAdapter` cannot add or remove single rules in the file: those
  calls raise `NotImplementedError`; save the whole policy instead.
- No watcher implementation is included, only the `Watcher` interface.