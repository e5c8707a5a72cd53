"""Tests for the public verified artisan listing."""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient

from talentnest.core.exceptions import NotFoundException
from talentnest.services.listing_service import ListingService


@pytest.mark.asyncio
class TestEligibility:
    """Every gate must hold for a profile to be listed."""

    async def test_fully_verified_artisan_is_listed(self, db_session, verified_artisan_factory):
        profile = await verified_artisan_factory()

        artisans = await ListingService().list_verified_artisans(db_session)

        assert [a["id"] for a in artisans] == [profile["id"]]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"verification_status": "pending"},
            {"verification_status": "rejected"},
            {"matric_number_verified": False},
            {"business_name_verified": False},
            {"certificates_verified": False},
            {"bio_verified": False},
            {"bio": None},
            {"bio": "   "},
            {"business_name": "  "},
        ],
    )
    async def test_single_failed_gate_hides_profile(
        self, db_session, verified_artisan_factory, overrides
    ):
        await verified_artisan_factory(**overrides)

        assert await ListingService().list_verified_artisans(db_session) == []

    @pytest.mark.parametrize("matric_number", [None, ""])
    async def test_owner_without_matric_number_is_hidden(
        self, db_session, verified_artisan_factory, matric_number
    ):
        await verified_artisan_factory(user_overrides={"matric_number": matric_number})

        assert await ListingService().list_verified_artisans(db_session) == []

    async def test_profile_without_certificate_is_hidden(
        self, db_session, user_factory, profile_factory, document_factory
    ):
        user = await user_factory(role="artisan")
        profile = await profile_factory(
            user,
            verification_status="approved",
            matric_number_verified=True,
            business_name_verified=True,
            certificates_verified=True,
            bio_verified=True,
        )
        await document_factory(profile, document_type="portfolio")

        assert await ListingService().list_verified_artisans(db_session) == []

    async def test_detail_of_ineligible_profile_is_not_found(
        self, db_session, verified_artisan_factory
    ):
        profile = await verified_artisan_factory(bio_verified=False)

        with pytest.raises(NotFoundException):
            await ListingService().get_verified_artisan(db_session, profile["id"])


@pytest.mark.asyncio
class TestFilters:
    """Search, category and location filters."""

    async def test_search_matches_any_text_field(self, db_session, verified_artisan_factory):
        by_name = await verified_artisan_factory(business_name="Kemi Cakes", bio="Baker")
        by_description = await verified_artisan_factory(
            business_name="Studio B", description="Wedding PHOTOGRAPHY", bio="Shooter"
        )
        by_specialization = await verified_artisan_factory(
            business_name="Fixit", bio="Repairs", specialization=["Phone Repair"]
        )
        await verified_artisan_factory(business_name="Unrelated", bio="Nothing here")

        service = ListingService()
        assert [a["id"] for a in await service.list_verified_artisans(db_session, search="cakes")] == [
            by_name["id"]
        ]
        assert [
            a["id"] for a in await service.list_verified_artisans(db_session, search="photography")
        ] == [by_description["id"]]
        assert [
            a["id"] for a in await service.list_verified_artisans(db_session, search="phone rep")
        ] == [by_specialization["id"]]

    async def test_category_is_case_insensitive_membership(
        self, db_session, verified_artisan_factory
    ):
        tailor = await verified_artisan_factory(specialization=["Fashion", "Tailoring"])
        await verified_artisan_factory(specialization=["Photography"])

        service = ListingService()
        fashion = await service.list_verified_artisans(db_session, category="fashion")
        assert [a["id"] for a in fashion] == [tailor["id"]]

        # Membership, not substring
        assert await service.list_verified_artisans(db_session, category="Fash") == []

        everything = await service.list_verified_artisans(db_session, category="all")
        assert len(everything) == 2

    async def test_location_substring(self, db_session, verified_artisan_factory):
        akoka = await verified_artisan_factory(location="Akoka, Lagos")
        await verified_artisan_factory(location="Ibadan")

        result = await ListingService().list_verified_artisans(db_session, location="akoka")

        assert [a["id"] for a in result] == [akoka["id"]]


@pytest.mark.asyncio
class TestOrdering:
    """Ordering and limits."""

    async def test_rating_desc_nulls_last_then_oldest_first(
        self, db_session, verified_artisan_factory
    ):
        unrated = await verified_artisan_factory(
            business_name="Unrated", rating=None, created_at=datetime(2026, 1, 1)
        )
        good_new = await verified_artisan_factory(
            business_name="Good new", rating=Decimal("4.50"), created_at=datetime(2026, 2, 1)
        )
        good_old = await verified_artisan_factory(
            business_name="Good old", rating=Decimal("4.50"), created_at=datetime(2026, 1, 15)
        )
        best = await verified_artisan_factory(
            business_name="Best", rating=Decimal("4.90"), created_at=datetime(2026, 3, 1)
        )

        artisans = await ListingService().list_verified_artisans(db_session)

        assert [a["id"] for a in artisans] == [
            best["id"],
            good_old["id"],
            good_new["id"],
            unrated["id"],
        ]

    async def test_limit_is_clamped(self, db_session, verified_artisan_factory):
        for _ in range(3):
            await verified_artisan_factory()

        service = ListingService()
        assert len(await service.list_verified_artisans(db_session, limit=2)) == 2
        assert len(await service.list_verified_artisans(db_session, limit=0)) == 1
        assert len(await service.list_verified_artisans(db_session, limit=500)) == 3


@pytest.mark.asyncio
class TestListingEndpoints:
    """Tests for /artisans."""

    async def test_projection_shape(self, client: AsyncClient, verified_artisan_factory):
        profile = await verified_artisan_factory(
            rating=Decimal("4.20"),
            total_reviews=7,
            pricing_base_rate=Decimal("15000.00"),
        )

        response = await client.get("/api/v1/artisans/verified")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total"] == 1
        assert body["message"] == "Found 1 verified artisans"

        artisan = body["data"][0]
        assert artisan["id"] == str(profile["id"])
        assert artisan["businessName"] == "Ada's Tailoring"
        assert artisan["experience"] == 3
        assert artisan["rating"] == 4.2
        assert artisan["totalReviews"] == 7
        assert artisan["verified"] is True
        assert artisan["verifiedBadge"] is True
        assert artisan["certificates"][0].startswith(f"{profile['user_id']}/")
        assert artisan["availability"] == {
            "isAvailable": True,
            "availableForWork": True,
            "availableForLearning": False,
            "responseTime": "within 24 hours",
        }
        assert artisan["pricing"] == {
            "baseRate": 15000.0,
            "learningRate": None,
            "currency": "NGN",
        }
        assert artisan["provider"]["matricNumber"] == "21-52hl001"
        assert artisan["provider"]["department"] == "Computer Science"
        assert "joinedAt" in artisan

    async def test_limit_out_of_range(self, client: AsyncClient):
        response = await client.get("/api/v1/artisans/verified", params={"limit": 101})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    async def test_detail(self, client: AsyncClient, verified_artisan_factory):
        profile = await verified_artisan_factory()

        response = await client.get(f"/api/v1/artisans/{profile['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["userId"] == str(profile["user_id"])

    async def test_detail_not_found_shape(self, client: AsyncClient):
        response = await client.get(f"/api/v1/artisans/{uuid4()}")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"] == "Artisan not found"
        assert "/api/v1/artisans/" in body["path"]
