import pytest
from sqlalchemy.exc import IntegrityError

from dentalportal.exceptions import SlugTakenError
from dentalportal.models.blog import Blog
from dentalportal.models.course import Course
from dentalportal.slugs import flush_guarding_slug, generate_slug, resolve_slug


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Hello World", "hello-world"),
        ("  Clear Aligners: 5 Myths!  ", "clear-aligners-5-myths"),
        ("Root---Canal  Therapy", "root-canal-therapy"),
        ("Ünïcode & Symbols", "n-code-symbols"),
        ("!!!", ""),
    ],
)
def test_generate_slug(title: str, expected: str) -> None:
    assert generate_slug(title) == expected


def _blog(slug: str) -> Blog:
    return Blog(title="t", slug=slug, content="c", tags=[])


async def test_resolve_slug_appends_counter(db_session) -> None:
    db_session.add_all([_blog("hello-world"), _blog("hello-world-1")])
    await db_session.flush()

    slug = await resolve_slug(db_session, Blog, title="Hello, World")

    assert slug == "hello-world-2"


async def test_resolve_slug_keeps_explicit_slug_verbatim(db_session) -> None:
    slug = await resolve_slug(db_session, Blog, title="Ignored", explicit="My_Custom Slug")

    assert slug == "My_Custom Slug"


async def test_resolve_slug_ignores_the_entity_being_updated(db_session) -> None:
    blog = _blog("braces-101")
    db_session.add(blog)
    await db_session.flush()

    slug = await resolve_slug(db_session, Blog, title="Braces 101", exclude_id=blog.id)

    assert slug == "braces-101"


async def test_resolve_slug_falls_back_when_title_has_no_letters(db_session) -> None:
    slug = await resolve_slug(db_session, Blog, title="???")

    assert len(slug) == 12


async def test_flush_guarding_slug_maps_unique_violation(db_session) -> None:
    db_session.add(_blog("taken"))
    await db_session.commit()

    duplicate = _blog("taken")
    db_session.add(duplicate)
    with pytest.raises(SlugTakenError) as excinfo:
        await flush_guarding_slug(db_session, duplicate)

    assert excinfo.value.status_code == 409


async def test_flush_guarding_slug_lets_other_violations_through(db_session) -> None:
    course = Course(
        title="Broken counter",
        slug="broken-counter",
        description="d",
        content="c",
        tags=[],
        enrollment_count=-1,
    )
    db_session.add(course)

    with pytest.raises(IntegrityError) as excinfo:
        await flush_guarding_slug(db_session, course)

    assert "CHECK constraint failed" in str(excinfo.value)
    await db_session.rollback()
