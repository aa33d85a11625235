from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

from app.models.enums import GalleryLabelEnum, PlotStatusEnum, RegionEnum
from app.models.gallery import GalleryImage, build_image_alt
from app.schemas.gallery import GalleryFilter, GalleryImageUpdate
from app.services.gallery_service import GalleryService, parse_plot_id
from tests.conftest import FakeAsyncSession, FakeResult


def _image_obj(**overrides: Any) -> GalleryImage:
    now = datetime.now(UTC)
    fields: dict[str, Any] = {
        "id": uuid4(),
        "plot_name": "Green Valley Farm",
        "plot_id": 1,
        "status": PlotStatusEnum.cultivation,
        "crop": "Potatoes",
        "region": RegionEnum.midwest,
        "label": GalleryLabelEnum.drone,
        "caption": "Aerial view of the potato field in peak season.",
        "date": datetime(2024, 8, 15, tzinfo=UTC),
        "image": "/assets/gallery/drone-1.jpg",
        "image_alt": "Drone photo of Green Valley Farm - Potatoes in Midwest",
        "is_active": True,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return GalleryImage(**fields)


def _create_body(**overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "plotName": "Sunny Acres",
        "plotId": 2,
        "status": "Acquired",
        "crop": "Corn",
        "region": "Midwest",
        "label": "Before",
        "caption": "Freshly acquired plot prepared for spring corn.",
        "date": "2024-03-10T00:00:00Z",
        "image": "/assets/gallery/before-1.jpg",
    }
    body.update(overrides)
    return body


def _compiled_sql(fake_db: FakeAsyncSession) -> str:
    return str(fake_db.execute.await_args.args[0].compile())


@pytest.mark.asyncio
async def test_create_image_derives_alt_text(client: AsyncClient, fake_db_session: FakeAsyncSession) -> None:
    response = await client.post("/api/gallery", json=_create_body())

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Gallery image created successfully"
    data = body["data"]
    assert data["imageAlt"] == "Before photo of Sunny Acres - Corn in Midwest"
    assert data["isActive"] is True
    assert data["statusColor"] == "bg-orange text-orange-foreground"
    assert data["labelColor"] == "bg-muted text-muted-foreground"
    assert len(fake_db_session.added) == 1


@pytest.mark.asyncio
async def test_create_image_keeps_supplied_alt_text(client: AsyncClient) -> None:
    response = await client.post("/api/gallery", json=_create_body(imageAlt="Empty field at dawn"))

    assert response.status_code == 201
    assert response.json()["data"]["imageAlt"] == "Empty field at dawn"


@pytest.mark.asyncio
async def test_create_image_rejects_future_date(
    client: AsyncClient,
    fake_db_session: FakeAsyncSession,
) -> None:
    tomorrow = (datetime.now(UTC) + timedelta(days=1)).isoformat()

    response = await client.post("/api/gallery", json=_create_body(date=tomorrow))

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert "Date cannot be in the future" in body["error"]
    assert fake_db_session.added == []


@pytest.mark.asyncio
async def test_create_image_rejects_unknown_region(client: AsyncClient) -> None:
    response = await client.post("/api/gallery", json=_create_body(region="Atlantis"))

    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_list_active_images_excludes_soft_deleted(
    client: AsyncClient,
    fake_db_session: FakeAsyncSession,
) -> None:
    fake_db_session.execute.return_value = FakeResult([_image_obj()])

    response = await client.get("/api/gallery")

    assert response.status_code == 200
    assert response.json()["count"] == 1
    sql = _compiled_sql(fake_db_session)
    assert "gallery_images.is_active IS" in sql
    assert "ORDER BY gallery_images.date DESC" in sql


@pytest.mark.asyncio
async def test_soft_delete_keeps_record_reachable_by_id() -> None:
    fake_db = FakeAsyncSession()
    image = _image_obj()
    fake_db.execute.return_value = FakeResult([image])
    service = GalleryService(fake_db)

    await service.soft_delete_image(image.id)

    assert image.is_active is False
    fake_db.delete.assert_not_awaited()
    assert await service.get_image(image.id) is image


@pytest.mark.asyncio
async def test_delete_routes(client: AsyncClient, fake_db_session: FakeAsyncSession) -> None:
    image = _image_obj()
    fake_db_session.execute.return_value = FakeResult([image])

    soft = await client.delete(f"/api/gallery/{image.id}")
    hard = await client.delete(f"/api/gallery/{image.id}/hard")

    assert soft.json() == {"success": True, "message": "Gallery image deleted successfully"}
    assert hard.json() == {"success": True, "message": "Gallery image permanently deleted"}
    fake_db_session.delete.assert_awaited_once_with(image)


@pytest.mark.asyncio
async def test_get_image_not_found(client: AsyncClient) -> None:
    response = await client.get(f"/api/gallery/{uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Gallery image not found"}


@pytest.mark.asyncio
async def test_malformed_image_id_is_400(client: AsyncClient, fake_db_session: FakeAsyncSession) -> None:
    response = await client.get("/api/gallery/not-a-uuid")

    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"
    assert fake_db_session.execute.await_count == 0


@pytest.mark.asyncio
async def test_filter_ignores_all_and_matches_crop_substring(
    client: AsyncClient,
    fake_db_session: FakeAsyncSession,
) -> None:
    fake_db_session.execute.return_value = FakeResult([_image_obj()])

    response = await client.get(
        "/api/gallery/filter",
        params={"crop": "pot", "status": "all", "region": "", "label": "all"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["filters"]["crop"] == "pot"
    assert body["filters"]["status"] == "all"
    sql = _compiled_sql(fake_db_session)
    assert "lower(gallery_images.crop) LIKE" in sql
    assert "gallery_images.is_active IS" in sql
    assert "gallery_images.status =" not in sql
    assert "gallery_images.region =" not in sql
    assert "gallery_images.label =" not in sql


@pytest.mark.asyncio
async def test_filter_applies_exact_matches() -> None:
    fake_db = FakeAsyncSession()
    filters = GalleryFilter(status="Harvested", region="Northwest", label="Harvest", plotId="3")

    await GalleryService(fake_db).list_filtered(filters)

    stmt = fake_db.execute.await_args.args[0]
    params = stmt.compile().params
    assert PlotStatusEnum.harvested in params.values()
    assert RegionEnum.northwest in params.values()
    assert GalleryLabelEnum.harvest in params.values()
    assert 3 in params.values()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("params", "expected"),
    [
        ({"status": "Flooded"}, "status must be one of"),
        ({"region": "midwest"}, "region must be one of"),
        ({"plotId": "abc"}, "plotId must be an integer"),
        ({"plotId": "0"}, "plotId must be a positive number"),
    ],
)
async def test_filter_rejects_invalid_values(
    client: AsyncClient,
    fake_db_session: FakeAsyncSession,
    params: dict[str, str],
    expected: str,
) -> None:
    response = await client.get("/api/gallery/filter", params=params)

    assert response.status_code == 400
    assert expected in response.json()["error"]
    assert fake_db_session.execute.await_count == 0


@pytest.mark.asyncio
async def test_plot_images(client: AsyncClient, fake_db_session: FakeAsyncSession) -> None:
    fake_db_session.execute.return_value = FakeResult([_image_obj(plot_id=4)])

    response = await client.get("/api/gallery/plot/4")

    assert response.status_code == 200
    body = response.json()
    assert body["plotId"] == 4
    assert body["count"] == 1
    assert body["data"][0]["plotId"] == 4


@pytest.mark.asyncio
async def test_plot_images_rejects_non_positive_id(client: AsyncClient) -> None:
    response = await client.get("/api/gallery/plot/0")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_merges_fields_and_rederives_cleared_alt() -> None:
    fake_db = FakeAsyncSession()
    image = _image_obj()
    fake_db.execute.return_value = FakeResult([image])
    payload = GalleryImageUpdate.model_validate({"label": "Harvest", "caption": None, "imageAlt": None})

    updated = await GalleryService(fake_db).update_image(image.id, payload)

    assert updated.label == GalleryLabelEnum.harvest
    assert updated.caption == "Aerial view of the potato field in peak season."
    assert updated.image_alt == "Harvest photo of Green Valley Farm - Potatoes in Midwest"


@pytest.mark.asyncio
async def test_update_keeps_existing_alt_when_not_sent() -> None:
    fake_db = FakeAsyncSession()
    image = _image_obj(image_alt="Custom alt")
    fake_db.execute.return_value = FakeResult([image])

    updated = await GalleryService(fake_db).update_image(
        image.id,
        GalleryImageUpdate.model_validate({"crop": "Sweet Potatoes"}),
    )

    assert updated.crop == "Sweet Potatoes"
    assert updated.image_alt == "Custom alt"


@pytest.mark.asyncio
async def test_filter_options(client: AsyncClient, fake_db_session: FakeAsyncSession) -> None:
    fake_db_session.execute.side_effect = [
        FakeResult(["Wheat", "Corn", "Potatoes"]),
        FakeResult([RegionEnum.northwest, RegionEnum.midwest]),
    ]

    response = await client.get("/api/gallery/options")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["crops"] == ["Corn", "Potatoes", "Wheat"]
    assert data["regions"] == ["Midwest", "Northwest"]
    assert data["statuses"] == ["Acquired", "Cultivation", "Harvested", "Planned", "Maintenance"]
    assert data["labels"] == ["Before", "Drone", "Harvest", "Progress", "Equipment"]


@pytest.mark.asyncio
async def test_stats_sequential_on_request_session() -> None:
    fake_db = FakeAsyncSession()
    fake_db.scalar.return_value = 3
    fake_db.execute.side_effect = [
        FakeResult(rows=[(PlotStatusEnum.cultivation, 2), (PlotStatusEnum.harvested, 1)]),
        FakeResult(rows=[(RegionEnum.midwest, 3)]),
        FakeResult(rows=[(GalleryLabelEnum.drone, 2), (GalleryLabelEnum.harvest, 1)]),
        FakeResult([_image_obj(), _image_obj(plot_id=3)]),
    ]

    stats = await GalleryService(fake_db).get_stats()

    assert stats.total_images == 3
    assert [(bucket.value, bucket.count) for bucket in stats.breakdown.by_status] == [
        ("Cultivation", 2),
        ("Harvested", 1),
    ]
    assert stats.breakdown.by_region[0].value == "Midwest"
    assert len(stats.recent_images) == 2
    recent_stmt = fake_db.execute.await_args.args[0]
    assert recent_stmt.compile().params.get("param_1") == 5


@pytest.mark.asyncio
async def test_stats_runs_each_read_on_its_own_session(
    client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    from app.routes import gallery as gallery_routes

    sessions = [FakeAsyncSession() for _ in range(5)]
    sessions[0].scalar.return_value = 2
    sessions[1].execute.return_value = FakeResult(rows=[(PlotStatusEnum.cultivation, 2)])
    sessions[2].execute.return_value = FakeResult(rows=[(RegionEnum.midwest, 2)])
    sessions[3].execute.return_value = FakeResult(rows=[(GalleryLabelEnum.drone, 2)])
    sessions[4].execute.return_value = FakeResult([_image_obj(), _image_obj()])
    pending = list(sessions)

    @asynccontextmanager
    async def fake_factory():
        yield pending.pop(0)

    monkeypatch.setattr(gallery_routes, "async_session_factory", fake_factory)

    response = await client.get("/api/gallery/stats")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalImages"] == 2
    assert data["breakdown"]["byStatus"] == [{"value": "Cultivation", "count": 2}]
    assert data["breakdown"]["byRegion"] == [{"value": "Midwest", "count": 2}]
    assert data["breakdown"]["byLabel"] == [{"value": "Drone", "count": 2}]
    assert len(data["recentImages"]) == 2
    assert pending == []


@pytest.mark.asyncio
async def test_seed_images_derives_alt_text() -> None:
    fake_db = FakeAsyncSession()

    images = await GalleryService(fake_db).seed_images()

    assert len(images) == 6
    assert images[0].image_alt == "Drone photo of Green Valley Farm - Potatoes in Midwest"
    assert all(image.is_active is True for image in images)
    assert all(
        image.image_alt == build_image_alt(image.label.value, image.plot_name, image.crop, image.region.value)
        for image in images
    )
    assert fake_db.added == images


@pytest.mark.asyncio
async def test_seed_images_twice_is_rejected(client: AsyncClient, fake_db_session: FakeAsyncSession) -> None:
    first = await client.post("/api/gallery/seed")
    fake_db_session.scalar.return_value = 6
    second = await client.post("/api/gallery/seed")

    assert first.status_code == 201
    assert first.json()["count"] == 6
    assert second.status_code == 400
    assert "already seeded" in second.json()["error"]
    assert len(fake_db_session.added) == 6


def test_parse_plot_id() -> None:
    assert parse_plot_id("7") == 7
    with pytest.raises(ValueError):
        parse_plot_id("x7")
    with pytest.raises(ValueError):
        parse_plot_id(-2)
