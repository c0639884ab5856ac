import pytest
from sqlalchemy import select

from dentalportal.models.blog import Blog
from dentalportal.pagination import ListParams, SortOrder, order_clause, paginate
from shared.models.pagination import PageMeta


@pytest.mark.parametrize(
    ("page", "limit", "total", "pages", "has_next", "has_prev"),
    [
        (1, 10, 0, 0, False, False),
        (1, 10, 25, 3, True, False),
        (3, 10, 25, 3, False, True),
        (2, 5, 10, 2, False, True),
    ],
)
def test_page_meta(page, limit, total, pages, has_next, has_prev) -> None:
    meta = PageMeta.build(page=page, limit=limit, total=total)

    assert meta.total_pages == pages
    assert meta.has_next_page is has_next
    assert meta.has_prev_page is has_prev


def test_page_meta_serializes_camel_case() -> None:
    dumped = PageMeta.build(page=1, limit=10, total=11).model_dump(by_alias=True)

    assert dumped["totalPages"] == 2
    assert dumped["hasNextPage"] is True


def test_order_clause_rejects_unknown_fields() -> None:
    params = ListParams(sort_by="password_hash", sort_order=SortOrder.ASC)

    primary, tie_breaker = order_clause(Blog, params, allowed=("title",))

    assert "created_at" in str(primary)
    assert "id" in str(tie_breaker)


async def test_paginate_counts_full_result(db_session) -> None:
    db_session.add_all(
        [Blog(title=f"Post {i}", slug=f"post-{i}", content="c", tags=[]) for i in range(7)]
    )
    await db_session.flush()
    params = ListParams(page=2, limit=3, sort_by="title", sort_order=SortOrder.ASC)

    items, meta = await paginate(
        db_session, select(Blog), params, order_by=order_clause(Blog, params, allowed=("title",)),
    )

    assert [b.title for b in items] == ["Post 3", "Post 4", "Post 5"]
    assert meta.total == 7
    assert meta.total_pages == 3
