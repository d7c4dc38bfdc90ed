from math import ceil
from types import SimpleNamespace
from flask import request

DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 200


class Pagination(SimpleNamespace):
    """Lightweight pagination object for in-memory lists

    Attributes:
      - items, page, per_page, total, pages, has_prev, has_next,
        prev_num, next_num
    """

    def __init__(self, items, page: int, per_page: int, total: int):
        pages = ceil(total / per_page) if per_page else 0
        has_prev = page > 1
        has_next = page < pages
        super().__init__(items=items, page=page, per_page=per_page, total=total, pages=pages,
                         has_prev=has_prev, has_next=has_next,
                         prev_num=(page - 1) if has_prev else None,
                         next_num=(page + 1) if has_next else None)

    def meta(self):
        """Pagination fields for a JSON response (everything but the items)."""
        return {
            'page': self.page,
            'per_page': self.per_page,
            'total': self.total,
            'pages': self.pages,
            'has_prev': self.has_prev,
            'has_next': self.has_next,
        }


def get_page_args(default_per_page: int = DEFAULT_PER_PAGE, max_per_page: int = MAX_PER_PAGE):
    """Safely read page and per_page from request args with validation."""
    try:
        page = int(request.args.get('page', 1))
    except (TypeError, ValueError):
        page = 1
    try:
        per_page = int(request.args.get('per_page', default_per_page))
    except (TypeError, ValueError):
        per_page = default_per_page

    if page < 1:
        page = 1
    if per_page < 1:
        per_page = default_per_page
    if per_page > max_per_page:
        per_page = max_per_page

    return page, per_page


def paginate_sequence(seq, page: int, per_page: int):
    """Paginate an in-memory sequence and return a Pagination object."""
    total = len(seq)
    if per_page <= 0:
        per_page = DEFAULT_PER_PAGE
    start = (page - 1) * per_page
    end = start + per_page
    items = seq[start:end]
    return Pagination(items=items, page=page, per_page=per_page, total=total)
