# safelang

`safelang` is a library of building blocks for the SAFE? language:

- `safelang.lexer`, `safelang.tokens`, `safelang.position`: a lexer that
  turns SAFE? source text into `Token` objects carrying a `TokenKind`, an
  optional text `value` and a `Span` with offsets, line and column;
- `safelang.ast`: the syntax tree node classes (`SourceFile`, `Function`,
  `Alias`, `Struct`, statements, expressions and types), with `to_dict` and
  `from_dict` to convert a tree to and from plain JSON-compatible data;
- `safelang.raw_memory`, `safelang.safe_memory`: a checked memory model in
  two layers, where every read and write is bounds-checked and misuse such as
  a double free raises `MemoryViolation`;
- `safelang.option`, `safelang.result`, `safelang.bytelist`,
  `safelang.safestring`: the runtime types `Option`, `Result`, `ByteList`
  and `SafeString` (with `StringSplit` and `StringList`) and their helper
  functions;
- `safelang.printing`: formatting and printing of runtime values;
- `safelang.project`: merging a program with its `import "file.safe"` lines,
  and setting up new project directories.

It needs Python 3.10 or later and has no dependencies outside the standard
library. Install the `test` extra to run the test suite with pytest.

## Lexing

```python
from safelang.lexer import tokenize, LexError
from safelang.tokens import TokenKind

tokens = tokenize("safe fn main() { let x = 10 }")
print(len(tokens))                             # 11
print(tokens[0].kind is TokenKind.SAFE)        # True
print(tokens[2].value)                         # main
print(tokens[0].span.line, tokens[0].span.column)  # 1 1

try:
    tokenize('let high_x = "hello\nworld"')
except LexError as err:
    print(err)  # line, column, and that a newline needs \n or a raw string
```

Line comments (`// ...`) and block comments (`/* ... */`) are skipped. String
literals accept the escapes `\n`, `\r`, `\t`, `\"`, `\\` and `\0`; raw
strings `r"..."`, `r#"..."#`, `r###"..."###` and so on may span lines.
Errors are raised as `LexError` (a `ValueError`) with the line and column
of the problem.

The single-token functions `symbol`, `literal`, `keyword_or_identifier`,
`parse_string_literal` and `parse_raw_string_literal` are also available;
each returns `None` when the text does not start with what it looks for.

## Syntax tree data

```python
from safelang import ast

tree = ast.SourceFile([
    ast.Alias("h_alloc", "allocate_buffer"),
    ast.Function(
        "main",
        ast.SafetyLevel.SAFE,
        [],
        None,
        ast.Block([ast.LetStatement("high_x", ast.PathType("i32"), ast.Literal(42))]),
    ),
])

data = ast.to_dict(tree)          # plain dicts, lists, strings and numbers
assert ast.from_dict(data) == tree
```

`from_dict` raises `ValueError` on data it cannot read.

## Checked memory

```python
from safelang.raw_memory import alloc, write, read, MemoryViolation
from safelang.safe_memory import validate_raw, into_high, deallocate_buffer

ptr = alloc(4)
write(ptr, 1, 42)
print(read(ptr, 1))  # 42

high = into_high(validate_raw(ptr))  # ownership moves to the safe layer
print(high.addr == ptr.addr)         # True
deallocate_buffer(high)

try:
    deallocate_buffer(high)
except MemoryViolation as err:
    print(err)  # deallocate_buffer ptr is invalid or already deallocated
```

Allocations are zero-filled; a size of zero, a null pointer, an offset
outside the buffer or a pointer that is no longer live raises
`MemoryViolation`.

## Runtime types

```python
from safelang.safestring import SafeString, string_split_all, string_list_get, string_trim
from safelang.bytelist import list_new, list_push_u8, list_len, list_get_u8

text = SafeString.from_text("safe")
text.push_str("? lang")
print(text.to_str())  # safe? lang

parts = string_split_all(SafeString.from_text("a,b,c,d"), SafeString.from_text(","))
print(string_list_get(parts, 2).unwrap().to_str())  # c

print(string_trim(SafeString.from_text("  padded  ")).to_str())  # padded

values = list_new()
list_push_u8(values, 65)
list_push_u8(values, 66)
print(list_len(values))                  # 2
print(list_get_u8(values, 5).is_none())  # True
```

`SafeString` and `ByteList` keep their bytes in buffers from
`safelang.safe_memory`. Both release the buffer on `close()`, at the end of a
`with` block, or when garbage-collected. `Option.unwrap` on an empty option
and `Result.unwrap` / `unwrap_err` on the wrong variant raise `UnwrapError`.

## Printing

```python
from safelang.printing import format_printable, print_value, printl

print(format_printable(False))  # false
printl(SafeString.from_text("hi"))
```

Strings, `SafeString`, booleans and integers are printable; anything else
raises `TypeError`.

## Projects and imports

```python
from safelang.project import collect_source_with_imports, init_new_project, ProjectError

root = init_new_project("demo")  # creates demo/Safe.toml and demo/src/main.safe

try:
    merged = collect_source_with_imports(root / "src" / "main.safe")
except ProjectError as err:
    print(err)
```

An import line is `import "path/to/file.safe"`, resolved relative to the
file containing it. Each file is included once, after the files it imports;
an import cycle raises `ProjectError` naming the full chain of resolved
paths. `init_current_dir()` sets up the working directory instead, and
`init_project_at(path, create_root)` any given directory; existing files are
left untouched.

## What this package does not do

It stops at tokens, syntax tree data and the runtime. It has no parser that
builds a syntax tree from tokens, no naming-rule or type checks, no code
generation, and no command-line tool for building or initialising projects;
the project helpers are only available as Python functions.