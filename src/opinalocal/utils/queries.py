"""Repository query helpers shared by the read side."""

from protean.utils.globals import current_domain

PAGE_SIZE = 100


def fetch_all(aggregate_cls, **filters) -> list:
    """Return every record of ``aggregate_cls`` matching ``filters``.

    Protean querysets are paginated, so pages are walked until exhausted.
    """
    queryset = current_domain.repository_for(aggregate_cls)._dao.query
    if filters:
        queryset = queryset.filter(**filters)

    items = []
    offset = 0
    while True:
        page = queryset.offset(offset).limit(PAGE_SIZE).all()
        items.extend(page.items)
        if len(page.items) < PAGE_SIZE:
            break
        offset += PAGE_SIZE
    return items


def fetch_first(aggregate_cls, **filters):
    """Return the first record matching ``filters``, or None."""
    queryset = current_domain.repository_for(aggregate_cls)._dao.query
    if filters:
        queryset = queryset.filter(**filters)
    items = queryset.limit(1).all().items
    return items[0] if items else None


def fetch_by_ids(aggregate_cls, ids) -> dict:
    """Map each id in ``ids`` to its record. Unknown ids are left out."""
    found = {}
    for record_id in {str(record_id) for record_id in ids}:
        record = fetch_first(aggregate_cls, id=record_id)
        if record is not None:
            found[record_id] = record
    return found
