# netnexus

Building blocks for the command-line configuration layer of a network
device. Each module of such a device describes its CLI views, databases and
configuration templates in an XML file. This package reads those files and
provides the data structures for views, command expressions and templates.

It uses only the Python standard library.

## Modules

### `netnexus.view`

- `View`: a CLI view with `view_id`, `view_name`, `prompt_template`, a
  `cmd_tree` slot, a `parent` and `children`.
  - `add_child(child)` attaches a child view and sets its parent.
  - `find_by_id(view_id)` searches depth-first and returns the view or `None`.
  - `walk()` yields the view and every descendant, parents first.
- `ViewTree`: holds the `root` view and an optional `global_view`.
- `prompt_template(root, view_id)` returns a view's prompt template. It raises
  `KeyError` if there is no root or no such view.

### `netnexus.expression`

Command expressions list element ids in order. `[ a | b ]` is an optional
choice (zero or one alternative) and `{ a | b }` is a required choice
(exactly one alternative). Other characters are ignored.

- `tokenize(expression)` returns a list of `Token` objects (`kind` is a
  `TokenKind`, `value` holds the number). The list always ends with an `END`
  token. Numbers wrap as unsigned 32-bit values.
- `parse_expression(expression)` returns an `ExprNode` tree, or `None` if
  the expression has no items. A node's `kind` is a `NodeKind`: `ELEMENT`
  (with `element_id`), `SEQUENCE`, `OPTIONAL` or `REQUIRED` (with
  `children`). A sequence of one item is returned as that item. A missing
  closing bracket is tolerated.

```python
from netnexus.expression import NodeKind, parse_expression

tree = parse_expression("1 2 [ 3 | 4 5 ] { 6 | 7 }")
assert tree.kind is NodeKind.SEQUENCE
assert [c.kind for c in tree.children] == [
    NodeKind.ELEMENT, NodeKind.ELEMENT, NodeKind.OPTIONAL, NodeKind.REQUIRED,
]
```

### `netnexus.template`

- `ConfigTemplate(name, priority=0)` has `child_names` and an optional `body`
  (a `TemplateBody` with `content` and `db_names`).
  - `add_child(child_name)` appends the name of a child template.
  - `set_body(content, db_names)` replaces the body.
  - `render(var_values)` replaces each `{name}` whose name is in the mapping
    and converts `\n` to `\r\n`. If the template has no body, the result is
    an empty string. If `var_values` is `None`, the content is returned
    unchanged.
- `parse_template_variables(content)` returns the names found inside `{...}`
  pairs, in order.
- `TemplateRegistry` stores templates by name. A new template replaces one
  with the same name. It has `add`, `find`, `all` (highest priority first),
  `clear`, `len()` and `in`.

```python
from netnexus.template import ConfigTemplate

tmpl = ConfigTemplate("bgp", priority=10)
tmpl.set_body("bgp {bgp_protocol.as_number}\n router-id {bgp_protocol.router_id}",
              ["bgp_protocol"])
text = tmpl.render({"bgp_protocol.as_number": "65000",
                    "bgp_protocol.router_id": "192.0.2.1"})
assert text == "bgp 65000\r\n router-id 192.0.2.1"
```

### `netnexus.xml_templates`

- `clean_template_content(content)` removes the whitespace that XML tags add
  around a template body. It drops one leading newline and a final line made
  only of spaces and tabs. It returns `None` if nothing is left.
- `parse_config_templates(element, registry)` reads a `<config_templates>`
  element:
  - `<template-def template-name=... priority=...>` elements define templates.
    Nested `<template-def>` elements name child templates, which are created
    with priority 0.
  - `<template template-name=... db="a, b">` elements supply bodies.

  It registers every template in `registry` and returns them as a list.

### `netnexus.xml_loader`

`load_module_xml(path, view_tree=None, template_registry=None)` reads a
module XML file and returns a `ModuleXml` with these fields:

- `module_id`
- `view_tree`
- `databases`: a list of `XmlDatabase`, each with `XmlTable` entries that
  hold `XmlField` entries
- `templates`

The root element must carry a `module-id` attribute. `XmlLoadError` is raised
if that attribute is missing or if the file cannot be read or parsed.

The first view loaded becomes the root of the tree. Later top-level views are
attached under the configuration view (`CONFIG_VIEW_ID`, id 1), unless a view
with the same id already exists.

`parse_view(element)` and `parse_databases(element, module_id)` parse single
`<view>` and `<dbs>` elements.

```xml
<module module-id="3">
  <views>
    <view view-id="1" view-name="config"><template>[~{hostname}]</template></view>
  </views>
  <dbs>
    <db db-name="bgp_db">
      <tables>
        <table table-name="bgp_protocol">
          <fields><field field-name="as_number" type="uint(1-4294967295)"/></fields>
        </table>
      </tables>
    </db>
  </dbs>
</module>
```

Diagnostics are reported through the standard `logging` module.

## What this package does not do

- It does not read `<command_groups>`. `parse_expression` parses a command
  expression, but nothing builds command trees from it or matches typed input
  against it. `View.cmd_tree` is left for the caller to fill.
- Database definitions are only read from XML as `XmlDatabase` records. No
  database files or tables are created, and no data is stored or queried.
- There is no command, telnet server or interactive CLI.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install .[test]
```

## Running the tests

```
pytest
```