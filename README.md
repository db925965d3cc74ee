# findkit

Building blocks for searching a directory tree the way `find` does. Each
test or action, such as matching a name, checking permissions or deleting a
file, is a *matcher*. A find expression given as a list of arguments is
parsed into a tree of matchers, which you then run against each entry of a
directory walk.

## Parsing an expression

```python
from findkit.base import MatcherIO, walk_entries
from findkit.builder import Config, build_top_level_matcher

config = Config()
matcher = build_top_level_matcher(["-name", "*.py", "-o", "-name", "*.txt"], config)

for entry in walk_entries("."):
    io = MatcherIO()          # writes to sys.stdout by default
    matcher.matches(entry, io)
    if io.should_quit():
        break
matcher.finished()
```

When the expression has no side effects of its own, `build_top_level_matcher`
appends an implicit `-print`, as `find` does. Options such as `-maxdepth`,
`-mindepth`, `-depth`/`-d`, `-xdev`/`-mount`, `-sorted`, `-help` and
`-version` are not matchers; they are recorded on the `Config` object.
`-delete` also sets `config.depth_first`.

`MatcherIO` takes an optional `output` stream and `clock` function, which is
handy for capturing output in tests:

```python
import io
out = io.StringIO()
matcher.matches(entry, MatcherIO(output=out))
```

## Supported expressions

- Tests: `-name`, `-iname`, `-path`, `-ipath`, `-wholename`, `-iwholename`,
  `-lname`, `-ilname`, `-perm`, `-empty`, `-readable`, `-writable`,
  `-executable`, `-true`, `-false`
- Actions: `-print`, `-print0`, `-delete`, `-exec … ;`, `-execdir … ;`,
  `-prune`
- Operators: `!`/`-not`, `-a`/`-and`, `-o`/`-or`, `,`, `(` … `)`

Invalid expressions raise `findkit.base.FindError` with a message in the
style of `find`, for example `missing argument to -name` or
`you have too many ')'`.

## Using matchers directly

```python
import os
from findkit.glob import Pattern, glob_to_regex
from findkit.filesystem import AccessMatcher
from findkit.perm import PermMatcher, parse_mode

Pattern("foo*BAR", True).matches("FOO--bar")   # True (caseless)
glob_to_regex("foo?bar*baz")                    # 'foo.bar.*baz'
parse_mode("u=rwx,g=rx,o+r", False)             # 0o754
PermMatcher("-u+r")                             # owner-readable entries
AccessMatcher(os.X_OK)                          # -executable
```

Matchers combine through `findkit.logical`: `AndMatcher`, `OrMatcher`,
`ListMatcher`, `NotMatcher`, `TrueMatcher`, `FalseMatcher`, and the
`AndMatcherBuilder`, `OrMatcherBuilder` and `ListMatcherBuilder` that apply
find's precedence rules. Numeric comparisons such as `+5`, `5` and `-5` are
represented by `findkit.base.ComparableValue`.

## What this package does not do

- There is no command-line program; you drive the walk from Python.
- `walk_entries` yields every entry beneath the root, parents first and in
  name order, without following symbolic links. It does not apply the
  settings in `Config` (depth limits, depth-first order, staying on one file
  system), nor does it honour `-prune`: after each entry, check
  `MatcherIO.should_skip_current_dir()` and skip that directory yourself.
- These expressions are recognised but raise `FindError` ("… is not
  supported"): `-type`, `-size`, `-mtime`, `-atime`, `-ctime`, `-newer`,
  `-inum`, `-links`, `-regex`, `-iregex`, `-regextype`, `-printf`, `-quit`.
  Their arguments are still checked first, so a missing or malformed
  argument reports the usual error.
- `-exec … {} +` is rejected; only the `;` form runs commands.
- `-perm` works only on POSIX systems.