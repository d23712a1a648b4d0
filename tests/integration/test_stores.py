"""
Integration tests for the entity stores against SQLite.
"""

import asyncio

import pytest
from sqlalchemy.exc import IntegrityError

from netops_core.db.builders import PageRequest
from netops_core.db.errors import classify_db_error
from netops_core.exceptions import ConflictError, ReferentialError

MISSING_ID = "00000000-0000-4000-8000-000000000000"


async def _existing_record(request, store_name):
    site = await request.getfixturevalue("site_store").create({"name": "HQ", "location": "Berlin"})
    if store_name == "site_store":
        return site
    container = await request.getfixturevalue("container_store").create(
        {"name": "Rack A1", "type": "rack", "site_id": site["id"]}
    )
    if store_name == "container_store":
        return container
    if store_name == "device_store":
        return await request.getfixturevalue("device_store").create(
            {"name": "sw1", "type": "switch", "container_id": container["id"]}
        )
    return await request.getfixturevalue("user_store").create(
        {"username": "bob", "email": "bob@x.com", "password": "secret1"}
    )


class TestEmptyUpdate:
    """An update with no fields reads the current row and writes nothing."""

    @pytest.mark.parametrize("store_name", ["site_store", "container_store", "device_store", "user_store"])
    async def test_empty_update_performs_no_write(self, request, store_name, mocker):
        store = request.getfixturevalue(store_name)
        record = await _existing_record(request, store_name)
        execute = mocker.spy(store.db, "execute")

        result = await store.update(record["id"], {})

        assert result == record
        execute.assert_not_called()


class TestSiteStore:
    """Test site persistence."""

    async def test_create_round_trip(self, site_store):
        created = await site_store.create({"name": "HQ", "location": "Berlin", "address": "Main St 1"})
        fetched = await site_store.find_by_id(created["id"])

        assert fetched == created
        assert fetched["status"] == "active"
        assert fetched["createdAt"].endswith("Z")

    async def test_partial_update_changes_only_supplied_fields(self, site_store, site):
        await asyncio.sleep(0.01)
        updated = await site_store.update(site["id"], {"name": "Headquarters"})

        assert updated["name"] == "Headquarters"
        assert updated["location"] == site["location"]
        assert updated["status"] == site["status"]
        assert updated["createdAt"] == site["createdAt"]
        assert updated["updatedAt"] > site["updatedAt"]

    async def test_back_to_back_updates_increase_updated_at(self, site_store, site):
        first = await site_store.update(site["id"], {"name": "One"})
        second = await site_store.update(site["id"], {"name": "Two"})

        assert site["updatedAt"] < first["updatedAt"] < second["updatedAt"]

    async def test_update_can_clear_nullable_field(self, site_store):
        site = await site_store.create({"name": "HQ", "location": "Berlin", "address": "Main St 1"})
        updated = await site_store.update(site["id"], {"address": None})
        assert updated["address"] is None

    async def test_update_missing_returns_none(self, site_store):
        assert await site_store.update(MISSING_ID, {"name": "x"}) is None
        assert await site_store.update(MISSING_ID, {}) is None

    async def test_unknown_field_rejected(self, site_store, site):
        with pytest.raises(ValueError):
            await site_store.update(site["id"], {"id": MISSING_ID})

    async def test_delete(self, site_store, site):
        assert await site_store.delete(site["id"]) is True
        assert await site_store.find_by_id(site["id"]) is None
        assert await site_store.delete(site["id"]) is False

    async def test_pagination_over_25_rows(self, site_store):
        for i in range(25):
            await site_store.create({"name": f"Site {i:02d}", "location": "Berlin"})

        page = await site_store.find_all(page=PageRequest(page=2, limit=10))

        assert len(page.items) == 10
        assert page.total == 25
        assert page.pages == 3

    async def test_last_page_is_partial(self, site_store):
        for i in range(25):
            await site_store.create({"name": f"Site {i:02d}", "location": "Berlin"})

        page = await site_store.find_all(page=PageRequest(page=3, limit=10))

        assert len(page.items) == 5
        assert page.total == 25

    async def test_filtered_total_matches_filtered_set(self, site_store):
        for i in range(6):
            await site_store.create({
                "name": f"Site {i}",
                "location": "Berlin" if i % 2 else "Hamburg",
                "status": "inactive" if i < 2 else "active",
            })

        berlin = await site_store.find_all(search="berl", page=PageRequest(limit=2))
        inactive = await site_store.find_all(status="inactive")

        assert berlin.total == 3
        assert len(berlin.items) == 2
        assert all(item["location"] == "Berlin" for item in berlin.items)
        assert inactive.total == 2

    async def test_search_matches_name_or_location(self, site_store):
        await site_store.create({"name": "Lab", "location": "Munich"})
        await site_store.create({"name": "Munich Office", "location": "Bavaria"})
        await site_store.create({"name": "HQ", "location": "Berlin"})

        result = await site_store.find_all(search="MUNICH")

        assert result.total == 2

    async def test_search_wildcards_match_literally(self, site_store):
        await site_store.create({"name": "Lab", "location": "Munich"})
        await site_store.create({"name": "Lab_1", "location": "Berlin"})
        await site_store.create({"name": "LabX1", "location": "Berlin"})

        percent = await site_store.find_all(search="%")
        underscore = await site_store.find_all(search="b_1")

        assert percent.total == 0
        assert [item["name"] for item in underscore.items] == ["Lab_1"]

    async def test_newest_first(self, site_store):
        first = await site_store.create({"name": "First", "location": "Berlin"})
        await asyncio.sleep(0.01)
        second = await site_store.create({"name": "Second", "location": "Berlin"})

        items = (await site_store.find_all()).items

        assert [item["id"] for item in items] == [second["id"], first["id"]]

    async def test_with_containers(self, site_store, container, site):
        result = await site_store.find_by_id_with_containers(site["id"])
        assert [c["id"] for c in result["containers"]] == [container["id"]]


class TestContainerStore:
    """Test container persistence."""

    async def test_capacity_defaults_to_zero(self, container_store, site):
        created = await container_store.create({"name": "Rack", "type": "rack", "site_id": site["id"]})
        fetched = await container_store.find_by_id(created["id"])

        assert fetched["capacity"] == 0
        assert fetched["siteId"] == site["id"]

    async def test_list_rows_nest_site(self, container_store, container, site):
        page = await container_store.find_all(site_id=site["id"])

        assert page.total == 1
        assert page.items[0]["site"] == {"id": site["id"], "name": "HQ", "location": "Berlin"}

    async def test_with_relations(self, container_store, device_store, container, site):
        device = await device_store.create({"name": "sw1", "type": "switch", "container_id": container["id"]})

        result = await container_store.find_by_id_with_relations(container["id"])

        assert result["site"]["id"] == site["id"]
        assert [d["id"] for d in result["devices"]] == [device["id"]]

    async def test_dangling_site_reference(self, container_store):
        with pytest.raises(IntegrityError) as exc_info:
            await container_store.create({"name": "Rack", "type": "rack", "site_id": MISSING_ID})
        assert isinstance(classify_db_error(exc_info.value), ReferentialError)

    async def test_site_with_containers_cannot_be_deleted(self, site_store, container, site):
        with pytest.raises(IntegrityError) as exc_info:
            await site_store.delete(site["id"])

        error = classify_db_error(exc_info.value)
        assert isinstance(error, ReferentialError)
        assert "still referenced" in error.message
        assert await site_store.find_by_id(site["id"]) is not None


class TestDeviceStore:
    """Test device persistence."""

    @pytest.mark.parametrize("mac", ["aa:bb:cc:dd:ee:ff", "AA:BB:CC:DD:EE:FF"])
    async def test_mac_upper_cased_on_create(self, device_store, container, mac):
        device = await device_store.create({
            "name": "sw1", "type": "switch", "container_id": container["id"], "mac_address": mac,
        })
        assert device["macAddress"] == "AA:BB:CC:DD:EE:FF"

    async def test_mac_upper_cased_on_update(self, device_store, container):
        device = await device_store.create({"name": "sw1", "type": "switch", "container_id": container["id"]})
        updated = await device_store.update(device["id"], {"mac_address": "0a:1b:2c:3d:4e:5f"})
        assert updated["macAddress"] == "0A:1B:2C:3D:4E:5F"

    async def test_filters_and_nested_container(self, device_store, container):
        await device_store.create({"name": "sw1", "type": "switch", "container_id": container["id"]})
        await device_store.create({"name": "r1", "type": "router", "container_id": container["id"]})
        await device_store.create({
            "name": "r2", "type": "router", "status": "maintenance", "container_id": container["id"],
        })

        routers = await device_store.find_all(type="router")
        active_routers = await device_store.find_all(type="router", status="active")

        assert routers.total == 2
        assert active_routers.total == 1
        assert active_routers.items[0]["container"] == {
            "id": container["id"], "name": "Rack A1", "type": "rack", "location": None,
        }

    async def test_with_relations_nests_site(self, device_store, container, site):
        device = await device_store.create({"name": "sw1", "type": "switch", "container_id": container["id"]})

        result = await device_store.find_by_id_with_relations(device["id"])

        assert result["container"]["id"] == container["id"]
        assert result["container"]["siteId"] == site["id"]
        assert result["container"]["site"] == {"id": site["id"], "name": "HQ", "location": "Berlin"}

    async def test_lookup_by_serial_and_ip(self, device_store, container):
        device = await device_store.create({
            "name": "fw1", "type": "firewall", "container_id": container["id"],
            "serial_number": "SN-001", "ip_address": "10.0.0.1",
        })

        by_serial = await device_store.find_by_serial_number("SN-001")
        by_ip = await device_store.find_by_ip_address("10.0.0.1")

        assert by_serial["id"] == device["id"]
        assert [d["id"] for d in by_ip] == [device["id"]]
        assert await device_store.find_by_serial_number("SN-404") is None


class TestUserStore:
    """Test user persistence."""

    async def test_password_hashed_and_hidden(self, user_store):
        user = await user_store.create({"username": "bob", "email": "Bob@X.com", "password": "secret1"})

        assert "password" not in user
        assert user["email"] == "bob@x.com"
        assert user["role"] == "user"

        with_hash = await user_store.find_by_email("bob@x.com", include_password=True)
        assert with_hash["password"] != "secret1"
        assert await user_store.verify_password(with_hash, "secret1")
        assert not await user_store.verify_password(with_hash, "wrong")

    async def test_password_change_is_hashed(self, user_store):
        user = await user_store.create({"username": "bob", "email": "bob@x.com", "password": "secret1"})
        await user_store.update(user["id"], {"password": "secret2"})

        with_hash = await user_store.find_by_id(user["id"], include_password=True)
        assert await user_store.verify_password(with_hash, "secret2")

    async def test_find_by_email_or_username(self, user_store):
        await user_store.create({"username": "bob", "email": "bob@x.com", "password": "secret1"})

        assert await user_store.find_by_email_or_username("other@x.com", "bob") is not None
        assert await user_store.find_by_email_or_username("bob@x.com", "other") is not None
        assert await user_store.find_by_email_or_username("other@x.com", "other") is None

    async def test_duplicate_username_is_conflict(self, user_store):
        await user_store.create({"username": "bob", "email": "bob@x.com", "password": "secret1"})
        with pytest.raises(IntegrityError) as exc_info:
            await user_store.create({"username": "bob", "email": "bob2@x.com", "password": "secret1"})
        assert isinstance(classify_db_error(exc_info.value), ConflictError)

    async def test_filter_by_role(self, user_store):
        await user_store.create({"username": "bob", "email": "bob@x.com", "password": "secret1"})
        await user_store.create({"username": "root", "email": "root@x.com", "password": "secret1", "role": "admin"})

        admins = await user_store.find_all(role="admin")

        assert admins.total == 1
        assert admins.items[0]["username"] == "root"
