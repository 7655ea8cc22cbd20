from app.application.ports.settings_repo import SiteSettingsDto
from app.infrastructure.persistence.sqlalchemy.repositories import artwork_repository_sql
from app.models import AdminUser, Artwork, Category, SiteSettings, utc_now


def test_utc_now_is_timezone_aware():
    assert utc_now().utcoffset().total_seconds() == 0


def test_table_timestamps_default_to_aware_utc():
    rows = [
        AdminUser(username="a", password_hash="h"),
        Category(name="c", slug="c"),
        Artwork(title="t", image_url="u", image_key="k", category_id="c"),
        SiteSettings(),
    ]
    for row in rows:
        assert row.created_at.tzinfo is not None
        assert row.updated_at.tzinfo is not None


def test_settings_dto_default_timestamps_are_aware():
    assert SiteSettingsDto().created_at.tzinfo is not None


def test_repository_update_stamps_aware_time(session, make_artwork, monkeypatch):
    stamps = []

    def recording_now():
        stamp = utc_now()
        stamps.append(stamp)
        return stamp

    monkeypatch.setattr(artwork_repository_sql, "utc_now", recording_now)

    artwork = make_artwork("Stamped")
    artwork_repository_sql.SqlArtworkRepository(session).update(artwork.id, {"title": "Restamped"})

    assert len(stamps) == 1
    assert stamps[0].tzinfo is not None
