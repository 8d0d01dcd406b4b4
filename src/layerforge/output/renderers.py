"""Human-readable rendering of ServiceResult, one renderer per operation.

:func:`render_result` draws the result onto a buffered console: a failure
line for errors, otherwise the renderer registered for ``result.op`` in
``_OP_RENDERERS`` (unknown ops get a key/value dump). With ``verbose`` the
telemetry span tree from ``result.meta`` is appended as a Rich tree.

:func:`render_quiet` is the ``--quiet`` form: bare values where an
operation has an obvious one (a composition, a list of names), otherwise
a single status word.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from layerforge.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from layerforge.services.result import ServiceResult

type Renderer = Callable[[ServiceResult, Console, bool], None]

# Span timings above these thresholds (ms) are highlighted.
_SLOW_MS = 100.0
_VERY_SLOW_MS = 1000.0


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* as plain text, or styled text on a terminal."""
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose)
    else:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console, verbose)
        if verbose and result.meta:
            _render_meta(console, result.meta)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render the minimal ``--quiet`` form of *result*."""
    if result.error is not None:
        return f"ERROR: {result.op} [{result.error.code}] {result.error.message}"
    quiet = _QUIET_FORMS.get(result.op)
    return quiet(result.data) if quiet else f"OK: {result.op}"


def layer_label(layer: dict[str, Any]) -> str:
    """Format a dumped LayerId or StoredLayerId as ``CATEGORY:VARIANT``."""
    return f"{layer['category']}:{layer['variant']}"


def _layers(layers: list[dict[str, Any]]) -> str:
    return ", ".join(layer_label(layer) for layer in layers) or "-"


# ── Building blocks ───────────────────────────────────────────────────


def _headline(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "lf.ok"), (f"  {result.op}", "lf.op")))


def _value_text(key: str, value: Any) -> Text:
    if key == "index" or key.endswith("_index"):
        return Text(str(value), style="lf.index")
    if key in ("name", "category"):
        return Text(str(value), style="lf.name")
    if isinstance(value, dict | list):
        return Text(json.dumps(value, separators=(",", ":")))
    return Text(str(value))


def _field(console: Console, key: str, value: Any) -> None:
    """Print ``  key: value`` with the value styled by what the key names."""
    console.print(Text.assemble((f"  {key}: ", "lf.key"), _value_text(key, value)))


def _fields(console: Console, data: dict[str, Any], keys: tuple[str, ...]) -> None:
    for key in keys:
        if key in data:
            _field(console, key, data[key])


def _span_label(span: dict[str, Any]) -> Text:
    duration = span.get("duration_ms", 0.0)
    if duration > _VERY_SLOW_MS:
        style = "bold red"
    elif duration > _SLOW_MS:
        style = "yellow"
    else:
        style = "dim"
    label = Text.assemble((f"{duration:>8.2f}ms", style), f"  {span.get('name', '?')}")
    notes = span.get("annotations")
    if notes:
        label.append("  " + ", ".join(f"{k}={v}" for k, v in notes.items()), style="dim")
    return label


def _add_spans(tree: Tree, span: dict[str, Any]) -> None:
    branch = tree.add(_span_label(span))
    for child in span.get("children", []):
        _add_spans(branch, child)


def _render_meta(console: Console, meta: dict[str, Any]) -> None:
    console.print()
    tree = Tree(Text("meta", style="dim"), guide_style="dim")
    for key, value in meta.items():
        if key == "telemetry":
            _add_spans(tree, value)
        else:
            tree.add(f"{key}: {value}")
    console.print(tree)


def _render_error(result: ServiceResult, console: Console, verbose: bool) -> None:
    err = result.error
    if err is None:
        return
    console.print(
        Text.assemble(
            ("ERROR", "lf.error"),
            (f"  {result.op}", "lf.op"),
            (f" [{err.code}]", "lf.key"),
            f": {err.message}",
        )
    )
    if verbose and err.detail:
        for key, value in err.detail.items():
            console.print(Text.assemble((f"    {key}: ", "lf.key"), str(value)))


# ── Mutations ─────────────────────────────────────────────────────────


def _render_added(result: ServiceResult, console: Console, verbose: bool) -> None:
    """add_categories / add_variants: the new indices and names."""
    _headline(console, result)
    _fields(console, result.data, ("category", "category_index", "count", "variant_count"))
    for item in result.data.get("added", []):
        console.print(Text.assemble((f"  {item['index']:>3}", "lf.index"), f"  {item['name']}"))


def _render_mutation(result: ServiceResult, console: Console, verbose: bool) -> None:
    _headline(console, result)
    _fields(
        console,
        result.data,
        ("index", "name", "skip", "changed", "category", "modified", "count"),
    )


def _render_sentinels(result: ServiceResult, console: Console, verbose: bool) -> None:
    _headline(console, result)
    _field(console, "cyclops", layer_label(result.data["cyclops"]))
    _field(console, "jawless", layer_label(result.data["jawless"]))


# ── Catalog ───────────────────────────────────────────────────────────


def _render_category(result: ServiceResult, console: Console, verbose: bool) -> None:
    """One category as a titled table of its variant window."""
    d = result.data
    title = Text.assemble((f"[{d['index']}] ", "lf.index"), (d["name"], "lf.name"))
    if d["skip"]:
        title.append(" (skip)", style="lf.skip")

    table = Table(title=title, pad_edge=False)
    table.add_column("Index", style="lf.index", justify="right", no_wrap=True)
    table.add_column("Name", style="lf.name")
    table.add_column("Display Name")
    table.add_column("Includes", style="lf.layer")
    if verbose:
        table.add_column("Art", style="dim")

    for entry in d["variants"]:
        cells = [str(entry["index"]), entry["name"], entry["display_name"]]
        cells.append(_layers(entry["includes"]))
        if verbose:
            cells.append("yes" if entry.get("art") else "")
        table.add_row(*cells)

    console.print(table)
    console.print(
        f"\n{len(d['variants'])} of {d['variant_count']} variants "
        f"(category {d['index'] + 1} of {d['category_count']})"
    )


def _render_variant(result: ServiceResult, console: Console, verbose: bool) -> None:
    info = result.data["info"]
    body = Text.assemble(
        ("category index: ", "lf.key"),
        (str(result.data["category_index"]), "lf.index"),
        ("\nvariant index: ", "lf.key"),
        (str(info["index"]), "lf.index"),
        ("\ndisplay name: ", "lf.key"),
        info["display_name"],
        ("\nincludes: ", "lf.key"),
        (_layers(info["includes"]), "lf.layer"),
    )
    if info.get("art"):
        body.append("\n\n" + info["art"])
    console.print(Panel(body, title=info["name"], border_style="dim", expand=False))


def _render_dependencies(result: ServiceResult, console: Console, verbose: bool) -> None:
    d = result.data
    table = Table(pad_edge=False)
    table.add_column("Layer", style="lf.name", no_wrap=True)
    table.add_column("Correlated", style="lf.layer")
    table.add_column("Includes", style="dim")
    for dep in d["dependencies"]:
        table.add_row(layer_label(dep["id"]), _layers(dep["correlated"]), _layers(dep["includes"]))
    console.print(table)
    console.print(f"\n{len(d['dependencies'])} of {d['count']} dependencies")


def _render_state(result: ServiceResult, console: Console, verbose: bool) -> None:
    _headline(console, result)
    _field(console, "category_count", result.data["category_count"])
    _field(console, "skip", ", ".join(result.data["skip"]) or "-")


def _render_export(result: ServiceResult, console: Console, verbose: bool) -> None:
    """Counts only; the full index payload is for ``--json``."""
    d = result.data
    _headline(console, result)
    _field(console, "categories", len(d["category_names"]))
    _field(console, "dependencies", len(d["dependencies"]))
    _field(console, "skip", d["skip"])
    if verbose:
        for dep in d["dependencies"]:
            console.print(f"    {layer_label(dep['id'])} -> {_layers(dep['correlated'])}")


# ── Composition ───────────────────────────────────────────────────────


def _render_transmute(result: ServiceResult, console: Console, verbose: bool) -> None:
    _headline(console, result)
    _field(console, "composition", ",".join(map(str, result.data["composition"])))


def _render_skull_type(result: ServiceResult, console: Console, verbose: bool) -> None:
    _headline(console, result)
    _field(console, "cyclops", result.data["is_cyclops"])
    _field(console, "jawless", result.data["is_jawless"])


def _render_generic(result: ServiceResult, console: Console, verbose: bool) -> None:
    _headline(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Renderer] = {
    "add_categories": _render_added,
    "add_variants": _render_added,
    "modify_category": _render_mutation,
    "modify_variants": _render_mutation,
    "set_skull_type_layers": _render_sentinels,
    "add_dependencies": _render_mutation,
    "remove_dependencies": _render_mutation,
    "modify_dependencies": _render_mutation,
    "category": _render_category,
    "variant": _render_variant,
    "dependencies": _render_dependencies,
    "state": _render_state,
    "serve_bulk_export": _render_export,
    "transmute": _render_transmute,
    "skull_type": _render_skull_type,
    "skull_type_layer_ids": _render_sentinels,
}

_QUIET_FORMS: dict[str, Callable[[dict[str, Any]], str]] = {
    "transmute": lambda d: ",".join(map(str, d["composition"])),
    "category": lambda d: "\n".join(v["name"] for v in d["variants"]),
    "dependencies": lambda d: "\n".join(layer_label(dep["id"]) for dep in d["dependencies"]),
    "skull_type": lambda d: f"{d['is_cyclops']},{d['is_jawless']}".lower(),
}
