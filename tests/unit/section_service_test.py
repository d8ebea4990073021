"""Tests for SectionService against an in-memory store."""

import asyncio
import json
from datetime import timedelta
from pathlib import Path

import pytest

from ellagarden_api.app.core import store as store_module
from ellagarden_api.app.core.errors import ConflictError, ForbiddenError, InternalError, ValidationError
from ellagarden_api.app.core.store import DataStore
from ellagarden_api.app.schemas.section import SectionCreate, SectionUpdate
from ellagarden_api.app.services.section_service import PROTECTED_SLUGS, SectionService, slugify


@pytest.fixture
def service(memory_store: DataStore) -> SectionService:
    return SectionService(memory_store)


class TestSlugify:
    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Gästlägenhet", "gastlagenhet"),
            ("Färgkoder", "fargkoder"),
            ("Ellagården", "ellagarden"),
            ("Öppettider & Regler", "oppettider-regler"),
            ("  --Tvättstuga 2024!--  ", "tvattstuga-2024"),
            ("A  B", "a-b"),
        ],
    )
    def test_slugify(self, title: str, expected: str) -> None:
        assert slugify(title) == expected

    def test_slugify_punctuation_only(self) -> None:
        assert slugify("!!!") == ""


class TestSeededSections:
    def test_default_sections_in_order(self, service: SectionService) -> None:
        sections = asyncio.run(service.list_sections())
        slugs = [s.slug for s in sections]
        assert slugs[:3] == ["aktivitetsrum", "elbil", "ellagarden"]
        assert slugs[-1] == "footer"
        assert len(sections) == 10
        assert [s.id for s in sections] == list(range(1, 11))

    def test_footer_holds_json(self, service: SectionService) -> None:

        footer = asyncio.run(service.get_section_by_slug("footer"))
        assert footer is not None
        assert json.loads(footer.content)["email"] == "styrelsen@ellagarden.se"

    def test_get_section_by_id_or_slug(self, service: SectionService) -> None:
        by_id = asyncio.run(service.get_section("2"))
        by_slug = asyncio.run(service.get_section("elbil"))
        assert by_id is not None and by_slug is not None
        assert by_id.id == by_slug.id == 2
        assert asyncio.run(service.get_section("saknas")) is None
        assert asyncio.run(service.get_section("999")) is None

    @pytest.mark.parametrize("key", ["\u00b2", "\u00b9\u00b2", "\u2460"])
    def test_digit_like_keys_fall_back_to_slug(self, service: SectionService, key: str) -> None:
        assert asyncio.run(service.get_section(key)) is None


class TestCreateSection:
    def test_slug_derived_from_title(self, service: SectionService) -> None:
        section = asyncio.run(service.create_section(SectionCreate(title="Tvättstuga")))
        assert section.slug == "tvattstuga"
        assert section.icon == "fa-file-alt"
        assert section.content == ""
        assert section.id == 11

    def test_explicit_fields_kept(self, service: SectionService) -> None:
        section = asyncio.run(
            service.create_section(SectionCreate(title="Cykelrum", slug="cyklar", icon="fa-bicycle", content="Hus 2"))
        )
        assert (section.slug, section.icon, section.content) == ("cyklar", "fa-bicycle", "Hus 2")

    def test_missing_title_rejected(self, service: SectionService) -> None:
        with pytest.raises(ValidationError):
            asyncio.run(service.create_section(SectionCreate(slug="utan-titel")))

    def test_underivable_slug_rejected(self, service: SectionService) -> None:
        with pytest.raises(ValidationError):
            asyncio.run(service.create_section(SectionCreate(title="???")))

    def test_duplicate_slug_rejected(self, service: SectionService) -> None:
        with pytest.raises(ConflictError):
            asyncio.run(service.create_section(SectionCreate(title="Elbil")))
        with pytest.raises(ConflictError):
            asyncio.run(service.create_section(SectionCreate(title="Laddning", slug="elbil")))

    def test_ids_not_reused_after_delete(self, service: SectionService) -> None:
        created = asyncio.run(service.create_section(SectionCreate(title="Tillfällig")))
        assert asyncio.run(service.delete_section(created.id)) is True
        again = asyncio.run(service.create_section(SectionCreate(title="Ny sektion")))
        assert again.id == created.id + 1


class TestUpdateSection:
    def test_partial_update(self, service: SectionService) -> None:
        before = asyncio.run(service.get_section_by_id(1))
        assert before is not None
        updated = asyncio.run(service.update_section(1, SectionUpdate(content="Ny text")))
        assert updated is not None
        assert updated.content == "Ny text"
        assert updated.title == before.title
        assert updated.slug == before.slug
        assert updated.icon == before.icon

    def test_updated_at_refreshed_even_without_changes(self, service: SectionService, memory_store: DataStore) -> None:
        stale = memory_store.sections[1].updated_at - timedelta(days=1)
        memory_store.sections[1] = memory_store.sections[1].model_copy(update={"updated_at": stale})
        updated = asyncio.run(service.update_section(1, SectionUpdate()))
        assert updated is not None
        assert updated.updated_at > stale

    def test_slug_collision_leaves_section_unchanged(self, service: SectionService) -> None:
        before = asyncio.run(service.get_section_by_id(3))
        with pytest.raises(ConflictError):
            asyncio.run(service.update_section(3, SectionUpdate(slug="elbil", title="Nytt namn")))
        assert asyncio.run(service.get_section_by_id(3)) == before

    def test_keeping_own_slug_is_allowed(self, service: SectionService) -> None:
        updated = asyncio.run(service.update_section(2, SectionUpdate(slug="elbil", icon="fa-plug")))
        assert updated is not None
        assert updated.icon == "fa-plug"

    def test_unknown_id(self, service: SectionService) -> None:
        assert asyncio.run(service.update_section(999, SectionUpdate(content="x"))) is None


class TestDeleteSection:
    @pytest.mark.parametrize("slug", sorted(PROTECTED_SLUGS))
    def test_protected_sections_cannot_be_deleted(self, service: SectionService, slug: str) -> None:
        section = asyncio.run(service.get_section_by_slug(slug))
        assert section is not None
        with pytest.raises(ForbiddenError):
            asyncio.run(service.delete_section(section.id))
        assert asyncio.run(service.get_section_by_slug(slug)) is not None

    def test_delete_regular_section(self, service: SectionService) -> None:
        assert asyncio.run(service.delete_section(5)) is True
        assert asyncio.run(service.get_section_by_id(5)) is None

    def test_delete_missing_is_noop(self, service: SectionService) -> None:
        assert asyncio.run(service.delete_section(999)) is False
        assert len(asyncio.run(service.list_sections())) == 10


class TestFailedSave:
    @pytest.fixture
    def failing_service(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> SectionService:
        service = SectionService(DataStore(tmp_path))

        def _raise(path: Path, payload: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(store_module, "write_json_atomic", _raise)
        return service

    def test_create_is_undone(self, failing_service: SectionService) -> None:
        with pytest.raises(InternalError):
            asyncio.run(failing_service.create_section(SectionCreate(title="Tvättstuga")))
        assert asyncio.run(failing_service.get_section_by_slug("tvattstuga")) is None

    def test_update_is_undone(self, failing_service: SectionService) -> None:
        with pytest.raises(InternalError):
            asyncio.run(failing_service.update_section(2, SectionUpdate(content="Ny text")))
        section = asyncio.run(failing_service.get_section_by_id(2))
        assert section is not None and section.content != "Ny text"

    def test_delete_is_undone(self, failing_service: SectionService) -> None:
        before = [s.id for s in asyncio.run(failing_service.list_sections())]
        with pytest.raises(InternalError):
            asyncio.run(failing_service.delete_section(5))
        assert [s.id for s in asyncio.run(failing_service.list_sections())] == before
