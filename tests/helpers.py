from pathlib import Path

def mark_by_dir(items, base_dir, marker):
    base = Path(base_dir).resolve()
    for item in items:
        # item.path on pytest >= 7, item.fspath before
        p = getattr(item, "path", None)
        p = Path(p) if p is not None else Path(str(getattr(item, "fspath")))
        try:
            p.resolve().relative_to(base)
        except ValueError:
            continue
        item.add_marker(marker)
