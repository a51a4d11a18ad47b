import unittest

from therapy_scheduler import db
from therapy_scheduler.models import Schedule, Session, Staff
from therapy_scheduler.scheduling import overlaps
from therapy_scheduler.seed import seed_data

from tests.helpers import DatabaseTestCase


class GenerateScheduleTestCase(DatabaseTestCase):
    def test_generate_without_staff_is_rejected(self) -> None:
        response = self.client.post("/api/schedule/generate")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["message"], "No active staff members found")
        self.assertEqual(Schedule.query.count(), 0)

    def test_generate_without_rooms_is_rejected(self) -> None:
        db.session.add(Staff(first_name="Noa", weekly_sessions=4))
        db.session.commit()

        response = self.client.post("/api/schedule/generate")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["message"], "No active rooms found")

    def test_generate_stores_an_active_schedule(self) -> None:
        seed_data()

        response = self.client.post("/api/schedule/generate")
        self.assertEqual(response.status_code, 200)
        body = response.get_json()

        schedule = body["schedule"]
        self.assertTrue(schedule["is_active"])
        self.assertGreater(body["created"], 0)
        self.assertEqual(body["created"], schedule["session_count"])
        self.assertEqual(len(schedule["sessions"]), body["created"])
        self.assertEqual(body["unmet_quotas"], [])
        self.assertEqual(Session.query.filter_by(schedule_id=schedule["id"]).count(), body["created"])

        for session in schedule["sessions"]:
            if session["weekday"] == "wednesday":
                lunch = ("12:30", "13:30")
            else:
                lunch = ("12:00", "13:00")
            self.assertFalse(overlaps(*lunch, session["start_time"], session["end_time"]))
            self.assertFalse(overlaps("08:00", "08:30", session["start_time"], session["end_time"]))

    def test_generation_is_repeatable(self) -> None:
        seed_data()

        first = self.client.post("/api/schedule/generate").get_json()["schedule"]
        second = self.client.post("/api/schedule/generate").get_json()["schedule"]

        def spans(schedule):
            return [
                (s["weekday"], s["start_time"], s["end_time"], s["staff_id"], s["room_id"])
                for s in schedule["sessions"]
            ]

        self.assertEqual(spans(first), spans(second))
        self.assertNotEqual(first["id"], second["id"])

    def test_inactive_staff_are_not_scheduled(self) -> None:
        seed_data()
        miri = Staff.query.filter_by(first_name="Miri").one()
        miri.is_active = False
        db.session.commit()

        body = self.client.post("/api/schedule/generate").get_json()
        staff_ids = {session["staff_id"] for session in body["schedule"]["sessions"]}
        self.assertNotIn(miri.id, staff_ids)


class ScheduleLifecycleTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        seed_data()
        self.first = self.client.post("/api/schedule/generate").get_json()["schedule"]
        self.second = self.client.post("/api/schedule/generate").get_json()["schedule"]

    def test_newest_schedule_is_active(self) -> None:
        response = self.client.get("/api/schedule/active")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["id"], self.second["id"])

    def test_list_schedules_without_sessions(self) -> None:
        response = self.client.get("/api/schedule")
        self.assertEqual(response.status_code, 200)
        schedules = response.get_json()
        self.assertEqual([item["id"] for item in schedules], [self.second["id"], self.first["id"]])
        self.assertEqual([item["is_active"] for item in schedules], [True, False])
        self.assertNotIn("sessions", schedules[0])

    def test_activate_older_schedule(self) -> None:
        response = self.client.put(f"/api/schedule/{self.first['id']}/activate")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()["is_active"])

        active = self.client.get("/api/schedule/active").get_json()
        self.assertEqual(active["id"], self.first["id"])
        self.assertEqual(Schedule.query.filter_by(is_active=True).count(), 1)

    def test_reactivating_the_active_schedule_keeps_it_active(self) -> None:
        response = self.client.put(f"/api/schedule/{self.second['id']}/activate")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()["is_active"])

        active = self.client.get("/api/schedule/active")
        self.assertEqual(active.status_code, 200)
        self.assertEqual(active.get_json()["id"], self.second["id"])
        self.assertEqual(Schedule.query.filter_by(is_active=True).count(), 1)

    def test_exactly_one_schedule_is_active(self) -> None:
        self.assertEqual(Schedule.query.filter_by(is_active=True).count(), 1)
        for schedule_id in (self.first["id"], self.second["id"], self.first["id"]):
            self.client.put(f"/api/schedule/{schedule_id}/activate")
            listed = self.client.get("/api/schedule").get_json()
            active_ids = [item["id"] for item in listed if item["is_active"]]
            self.assertEqual(active_ids, [schedule_id])
        self.client.post("/api/schedule/generate")
        self.assertEqual(Schedule.query.filter_by(is_active=True).count(), 1)

    def test_get_and_delete_schedule(self) -> None:
        response = self.client.get(f"/api/schedule/{self.first['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.get_json()["sessions"]), self.first["session_count"])

        response = self.client.delete(f"/api/schedule/{self.first['id']}")
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(f"/api/schedule/{self.first['id']}").status_code, 404)
        self.assertEqual(Session.query.filter_by(schedule_id=self.first["id"]).count(), 0)

    def test_no_active_schedule(self) -> None:
        self.client.delete(f"/api/schedule/{self.second['id']}")
        self.assertEqual(self.client.get("/api/schedule/active").status_code, 404)

    def test_unknown_schedule(self) -> None:
        self.assertEqual(self.client.put("/api/schedule/999/activate").status_code, 404)


if __name__ == "__main__":
    unittest.main()
