"""
Unit tests for RosterService.

The service coroutines never await anything slow, so each test drives
them with ``asyncio.run``.
"""

from __future__ import annotations

import asyncio
import threading

import pytest
from pydantic import ValidationError

from crew_roster_api.app.core.errors import InvalidInput, NotFound
from crew_roster_api.app.schemas.crew import MembershipChange
from crew_roster_api.app.schemas.rower import RowerCreate
from crew_roster_api.app.services.roster_service import RosterService


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def service() -> RosterService:
    return RosterService()


class TestSeedState:
    def test_new_service_is_seeded(self, service: RosterService):
        rowers = run(service.list_rowers())
        crews = run(service.list_crews())
        assert [r.model_dump() for r in rowers] == [{"id": 1, "name": "John Doe"}]
        assert [c.model_dump() for c in crews] == [{"id": 1, "name": "Men's 8+"}]

    def test_seed_rower_record(self, service: RosterService):
        rower = run(service.get_rower(1))
        assert rower.model_dump(by_alias=True) == {
            "id": 1,
            "name": "John Doe",
            "height": 190,
            "weight": 85,
            "twoKTime": "6:30",
            "isIll": False,
            "photoUrl": "",
        }

    def test_seed_crew_contains_seed_rower(self, service: RosterService):
        assert run(service.get_crew(1)).rower_ids == [1]

    def test_reset_restores_seed_and_counters(self, service: RosterService):
        run(service.create_rower({"name": "A"}))
        run(service.create_rower({"name": "B"}))
        crew = run(service.create_crew({"name": "Extra"}))
        run(service.add_rower_to_crew(crew.id, 2))
        run(service.remove_rower_from_crew(1, 1))

        run(service.reset_to_seed())

        assert [r.model_dump() for r in run(service.list_rowers())] == [{"id": 1, "name": "John Doe"}]
        assert [c.model_dump() for c in run(service.list_crews())] == [{"id": 1, "name": "Men's 8+"}]
        assert run(service.get_crew(1)).rower_ids == [1]
        assert run(service.create_rower({"name": "Next"})).id == 2
        assert run(service.create_crew({"name": "Next"})).id == 2


class TestCreateRower:
    def test_create_echoes_fields(self, service: RosterService):
        rower = run(service.create_rower({"name": "Test Rower", "height": 180, "weight": 75, "twoKTime": "6:50"}))
        assert rower.id == 2
        assert rower.name == "Test Rower"
        assert rower.height == 180
        assert rower.weight == 75
        assert rower.two_k_time == "6:50"
        assert rower.is_ill is False
        assert rower.photo_url == ""
        assert run(service.get_rower(2)) == rower

    def test_name_is_trimmed(self, service: RosterService):
        assert run(service.create_rower({"name": "  Jane  "})).name == "Jane"

    def test_optional_fields_default(self, service: RosterService):
        rower = run(service.create_rower({"name": "Jane"}))
        assert rower.height is None
        assert rower.weight is None
        assert rower.two_k_time == ""
        assert rower.is_ill is False

    def test_accepts_form_string_encodings(self, service: RosterService):
        rower = run(
            service.create_rower({"name": "Jane", "height": "172.5", "weight": "", "isIll": "true"})
        )
        assert rower.height == 172.5
        assert rower.weight is None
        assert rower.is_ill is True

    def test_accepts_schema_instance(self, service: RosterService):
        rower = run(service.create_rower(RowerCreate(name="Jane", two_k_time="7:01", is_ill=True)))
        assert rower.two_k_time == "7:01"
        assert rower.is_ill is True

    @pytest.mark.parametrize("payload", [{"name": ""}, {"name": "   "}, {}, {"name": None}])
    def test_blank_name_rejected(self, service: RosterService, payload):
        with pytest.raises(InvalidInput, match="Name is required"):
            run(service.create_rower(payload))

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Jane", "height": "tall"},
            {"name": "Jane", "weight": "nan"},
            {"name": "Jane", "isIll": "maybe"},
        ],
    )
    def test_malformed_values_rejected(self, service: RosterService, payload):
        with pytest.raises(InvalidInput):
            run(service.create_rower(payload))

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Jane", "height": True},
            {"name": "Jane", "weight": False},
            {"name": "X", "height": True, "weight": False},
        ],
    )
    def test_booleans_are_not_numbers(self, service: RosterService, payload):
        with pytest.raises(InvalidInput, match="not a boolean"):
            run(service.create_rower(payload))
        assert [r.id for r in run(service.list_rowers())] == [1]

    def test_whole_numbers_stay_integers(self, service: RosterService):
        rower = run(service.create_rower({"name": "Jane", "height": 180, "weight": "75"}))
        assert type(rower.height) is int
        assert type(rower.weight) is int
        assert rower.model_dump_json(by_alias=True).startswith('{"id":2,"name":"Jane","height":180,"weight":75,')

    def test_fractional_numbers_stay_floats(self, service: RosterService):
        rower = run(service.create_rower({"name": "Jane", "height": 180.5, "weight": 80.0}))
        assert rower.height == 180.5
        assert type(rower.weight) is float

    def test_failed_creation_consumes_no_id(self, service: RosterService):
        with pytest.raises(InvalidInput):
            run(service.create_rower({"name": " "}))
        assert run(service.create_rower({"name": "Jane"})).id == 2

    def test_ids_strictly_increase(self, service: RosterService):
        ids = [run(service.create_rower({"name": f"Rower {i}"})).id for i in range(5)]
        assert ids == [2, 3, 4, 5, 6]

    def test_returned_record_is_a_copy(self, service: RosterService):
        rower = run(service.create_rower({"name": "Jane"}))
        rower.name = "Changed"
        assert run(service.get_rower(rower.id)).name == "Jane"

    def test_concurrent_creates_get_unique_ids(self, service: RosterService):
        ids = []
        lock = threading.Lock()

        def worker():
            for _ in range(20):
                rower = asyncio.run(service.create_rower({"name": "Parallel"}))
                with lock:
                    ids.append(rower.id)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(ids) == list(range(2, 82))


class TestGet:
    def test_missing_rower(self, service: RosterService):
        with pytest.raises(NotFound, match="Rower not found"):
            run(service.get_rower(42))

    def test_missing_crew(self, service: RosterService):
        with pytest.raises(NotFound, match="Crew not found"):
            run(service.get_crew(42))


class TestCrews:
    def test_create_crew_starts_empty(self, service: RosterService):
        crew = run(service.create_crew({"name": " Test Crew "}))
        assert crew.id == 2
        assert crew.name == "Test Crew"
        assert crew.rower_ids == []

    @pytest.mark.parametrize("payload", [{"name": ""}, {"name": "  "}, {}])
    def test_blank_crew_name_rejected(self, service: RosterService, payload):
        with pytest.raises(InvalidInput, match="Name is required"):
            run(service.create_crew(payload))

    def test_list_crews_in_creation_order(self, service: RosterService):
        run(service.create_crew({"name": "B"}))
        run(service.create_crew({"name": "A"}))
        assert [c.name for c in run(service.list_crews())] == ["Men's 8+", "B", "A"]


class TestMembership:
    def test_add_appends_in_order(self, service: RosterService):
        crew = run(service.create_crew({"name": "Four"}))
        second = run(service.create_rower({"name": "Second"}))
        run(service.add_rower_to_crew(crew.id, second.id))
        updated = run(service.add_rower_to_crew(crew.id, 1))
        assert updated.rower_ids == [second.id, 1]

    def test_add_is_idempotent(self, service: RosterService):
        rower = run(service.create_rower({"name": "Jane"}))
        once = run(service.add_rower_to_crew(1, rower.id))
        twice = run(service.add_rower_to_crew(1, rower.id))
        assert once.rower_ids == twice.rower_ids == [1, rower.id]

    def test_add_unknown_rower(self, service: RosterService):
        with pytest.raises(NotFound, match="Rower not found"):
            run(service.add_rower_to_crew(1, 9999))
        assert run(service.get_crew(1)).rower_ids == [1]

    def test_membership_body_rejects_boolean_rower_id(self):
        with pytest.raises(ValidationError, match="rowerId must be a number"):
            MembershipChange.model_validate({"rowerId": True})
        assert MembershipChange.model_validate({"rowerId": "2"}).rower_id == 2

    def test_add_to_unknown_crew_checks_crew_first(self, service: RosterService):
        with pytest.raises(NotFound, match="Crew not found"):
            run(service.add_rower_to_crew(9999, 9999))

    def test_rower_may_join_several_crews(self, service: RosterService):
        other = run(service.create_crew({"name": "Second boat"}))
        run(service.add_rower_to_crew(other.id, 1))
        assert 1 in run(service.get_crew(1)).rower_ids
        assert 1 in run(service.get_crew(other.id)).rower_ids

    def test_remove_member(self, service: RosterService):
        assert run(service.remove_rower_from_crew(1, 1)).rower_ids == []

    def test_remove_absent_member_is_noop(self, service: RosterService):
        assert run(service.remove_rower_from_crew(1, 2)).rower_ids == [1]

    def test_remove_does_not_check_rower_exists(self, service: RosterService):
        assert run(service.remove_rower_from_crew(1, 9999)).rower_ids == [1]

    def test_remove_from_unknown_crew(self, service: RosterService):
        with pytest.raises(NotFound, match="Crew not found"):
            run(service.remove_rower_from_crew(9999, 1))

    def test_returned_crew_is_a_copy(self, service: RosterService):
        crew = run(service.get_crew(1))
        crew.rower_ids.append(99)
        assert run(service.get_crew(1)).rower_ids == [1]

    def test_full_scenario(self, service: RosterService):
        crew = run(service.create_crew({"name": "Test Crew"}))
        assert crew.rower_ids == []

        rower = run(service.create_rower({"name": "Test Rower", "twoKTime": "6:50"}))
        assert rower.name == "Test Rower"
        assert rower.two_k_time == "6:50"

        assert run(service.add_rower_to_crew(crew.id, rower.id)).rower_ids == [rower.id]
        assert run(service.remove_rower_from_crew(crew.id, rower.id)).rower_ids == []
