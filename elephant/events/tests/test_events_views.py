from datetime import date, timedelta
from unittest.mock import MagicMock, patch

from django.test import SimpleTestCase
from django.urls import reverse

from backend.client import SESSION_COOKIES_KEY, BackendClient
from backend.exceptions import BackendError, BackendNotFound
from backend.resources import WalkInCount
from conftest import make_attendee, make_event, make_payslip
from events.views import new_event_defaults


class AdminViewTestCase(SimpleTestCase):
    def setUp(self):
        self.backend = MagicMock(spec=BackendClient)
        patcher = patch.object(BackendClient, "for_request", return_value=self.backend)
        patcher.start()
        self.addCleanup(patcher.stop)

        session = self.client.session
        session[SESSION_COOKIES_KEY] = {"connect.sid": "admin"}
        session.save()

    def messages(self, response):
        return [str(m) for m in response.context["messages"]]


class DashboardTests(AdminViewTestCase):
    def test_splits_active_and_inactive_newest_first(self):
        self.backend.get_events.return_value = [
            make_event(id=1, start_date="2025-01-01", is_active=True),
            make_event(id=2, start_date="2025-06-01", is_active=False),
            make_event(id=3, start_date="2025-03-01", is_active=True),
        ]
        response = self.client.get(reverse("events:dashboard"))
        self.assertEqual([e.id for e in response.context["active_events"]], [3, 1])
        self.assertEqual([e.id for e in response.context["inactive_events"]], [2])
        self.assertContains(response, "Create New Event")

    def test_load_failure_shows_error(self):
        self.backend.get_events.side_effect = BackendError("boom", status=500)
        response = self.client.get(reverse("events:dashboard"))
        self.assertEqual(response.status_code, 502)
        self.assertContains(
            response, "Failed to load events data. Please try again later.", status_code=502
        )


class NewEventTests(AdminViewTestCase):
    def test_defaults_carry_over_latest_event_text(self):
        latest = make_event(email_template_content="Bring ID", inactive_message="Soon")
        data = new_event_defaults("Party", date(2025, 5, 1), latest, today=date(2025, 3, 1))
        self.assertEqual(data["email_template_content"], "Bring ID")
        self.assertEqual(data["inactive_message"], "Soon")
        self.assertEqual(data["ticket_deadline"], date(2025, 3, 31))
        self.assertEqual(
            (data["ticket_price_regular"], data["ticket_price_bundle"], data["bundle_size"]),
            (100, 80, 2),
        )
        self.assertEqual((data["max_tickets"], data["walk_in_price"]), (100, 120))
        self.assertIs(data["is_active"], False)

    def test_defaults_without_previous_event(self):
        data = new_event_defaults("Party", date(2025, 5, 1))
        self.assertEqual(data["email_template_content"], "Thank you for your purchase!")
        self.assertEqual(data["inactive_message"], "This event is not currently active.")

    def test_create_redirects_to_new_event(self):
        self.backend.get_events.return_value = [
            make_event(id=1, start_date="2024-01-01", email_template_content="Old"),
            make_event(id=2, start_date="2025-01-01", email_template_content="Newest"),
        ]
        self.backend.create_event.return_value = make_event(id=77)

        response = self.client.post(
            reverse("events:new_event"), {"title": "Party", "start_date": "2025-05-01"}
        )

        self.assertRedirects(
            response,
            reverse("events:event_detail", args=[77]),
            fetch_redirect_response=False,
        )
        sent = self.backend.create_event.call_args.args[0]
        self.assertEqual(sent["title"], "Party")
        self.assertEqual(sent["start_date"], date(2025, 5, 1))
        self.assertEqual(sent["email_template_content"], "Newest")

    def test_title_is_required(self):
        response = self.client.post(reverse("events:new_event"), {"start_date": "2025-05-01"})
        self.assertIn("title", response.context["form"].errors)
        self.backend.create_event.assert_not_called()


class EventDetailTests(AdminViewTestCase):
    def form_data(self, **overrides):
        data = {
            k: ("" if v is None else v)
            for k, v in make_event().editable_data().items()
            if k not in ("id", "poster_image_url")
        }
        data["is_active"] = "on"
        data.update(overrides)
        return data

    def test_not_found_has_its_own_message(self):
        self.backend.get_event.side_effect = BackendNotFound("nope", status=404)
        response = self.client.get(reverse("events:event_detail", args=[5]))
        self.assertContains(response, "Event not found", status_code=404)
        self.assertContains(response, "Back to Dashboard", status_code=404)

    def test_edit_sends_editable_fields_and_blank_bundle(self):
        self.backend.get_event.return_value = make_event()
        response = self.client.post(
            reverse("events:event_detail", args=[5]),
            self.form_data(ticket_price_bundle="", bundle_size="", title="Renamed"),
        )
        self.assertEqual(response.status_code, 302)
        args, kwargs = self.backend.update_event.call_args
        self.assertEqual(args[0], 5)
        self.assertEqual(args[1]["title"], "Renamed")
        self.assertIsNone(args[1]["ticket_price_bundle"])
        self.assertIsNone(args[1]["bundle_size"])
        self.assertNotIn("sold_tickets", args[1])
        self.assertIsNone(kwargs["poster"])

    def test_edit_with_poster_passes_upload(self):
        self.backend.get_event.return_value = make_event()
        data = self.form_data()
        data["poster"] = make_payslip("poster.png")
        self.client.post(reverse("events:event_detail", args=[5]), data)
        self.assertEqual(self.backend.update_event.call_args.kwargs["poster"].name, "poster.png")

    def test_toggle_active_patches_opposite_state(self):
        self.backend.get_event.return_value = make_event(is_active=True)
        self.backend.update_event.return_value = make_event(is_active=False)
        response = self.client.post(reverse("events:toggle_active", args=[5]), follow=True)
        self.backend.update_event.assert_called_once_with(5, {"is_active": False})
        self.assertIn("Event deactivated successfully!", self.messages(response))

    def test_delete_needs_confirmation(self):
        response = self.client.get(reverse("events:delete_event", args=[5]))
        self.assertContains(response, "Are you sure you want to delete this event?")
        self.backend.delete_event.assert_not_called()

        response = self.client.post(reverse("events:delete_event", args=[5]))
        self.backend.delete_event.assert_called_once_with(5)
        self.assertRedirects(response, reverse("events:dashboard"), fetch_redirect_response=False)


class DoorTests(AdminViewTestCase):
    def setUp(self):
        super().setUp()
        self.backend.get_event.return_value = make_event(
            walk_in_cash_count=0, walk_in_gcash_count=2
        )
        self.backend.get_event_attendees.return_value = []
        self.backend.get_walk_in_counts.return_value = WalkInCount(cash=0, gcash=2)

    def test_door_groups_and_counts(self):
        self.backend.get_event_attendees.return_value = [
            make_attendee(1, "Ben", "Ana", checked_in=True),
            make_attendee(2, "Ana", "Ana"),
        ]
        response = self.client.get(reverse("events:door", args=[5]))
        groups = response.context["groups"]
        self.assertEqual([a.name for a in groups[0][1]], ["Ana", "Ben"])
        self.assertEqual(response.context["totals"]["total_guests"], 3)
        self.backend.get_event_attendees.assert_called_once_with(5)

    def test_attendee_without_id_has_no_check_in_form(self):
        self.backend.get_event_attendees.return_value = [
            make_attendee(None, "Ana", "Ana", checked_in=True),
            make_attendee(2, "Ben", "Ana"),
        ]
        response = self.client.get(reverse("events:door", args=[5]))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, reverse("events:check_in", args=[5, 2]))
        self.assertContains(response, "Ana")

    def test_decrement_at_zero_sends_nothing(self):
        self.client.post(
            reverse("events:walk_in", args=[5, "decrement"]), {"payment_type": "cash"}
        )
        self.backend.get_walk_in_counts.assert_called_once_with(5)
        self.backend.decrement_walk_in.assert_not_called()

    def test_decrement_above_zero(self):
        self.backend.decrement_walk_in.return_value = {"walk_in_gcash_count": 1}
        response = self.client.post(
            reverse("events:walk_in", args=[5, "decrement"]),
            {"payment_type": "gcash"},
            follow=True,
        )
        self.backend.decrement_walk_in.assert_called_once_with(5, "gcash")
        self.assertIn(
            "Successfully decremented gcash walk-in count (now 1)", self.messages(response)
        )

    def test_increment_is_unbounded(self):
        self.backend.increment_walk_in.return_value = {"walk_in_cash_count": 1}
        self.client.post(
            reverse("events:walk_in", args=[5, "increment"]), {"payment_type": "cash"}
        )
        self.backend.increment_walk_in.assert_called_once_with(5, "cash")

    def test_unknown_walk_in_action_is_404(self):
        response = self.client.post(
            reverse("events:walk_in", args=[5, "reset"]), {"payment_type": "cash"}
        )
        self.assertEqual(response.status_code, 404)

    def test_check_in_reports_new_state(self):
        self.backend.toggle_attendee_check_in.return_value = make_attendee(
            9, "Ana", "Ana", checked_in=True
        )
        response = self.client.post(
            reverse("events:check_in", args=[5, 9]), {"q": "an"}, follow=True
        )
        self.assertIn("Successfully checked in Ana", self.messages(response))
        self.assertEqual(response.redirect_chain[0][0], reverse("events:door", args=[5]) + "?q=an")


class ReportTests(AdminViewTestCase):
    def test_financial_report_download(self):
        self.backend.get_event.return_value = make_event(title="Jazz Night: Live!")
        self.backend.get_report_pdf.return_value = b"%PDF-1.4"

        response = self.client.get(reverse("events:download_report", args=[5, "accounting"]))

        self.backend.get_report_pdf.assert_called_once_with(5, "accounting")
        self.assertEqual(response["Content-Type"], "application/pdf")
        self.assertEqual(
            response["Content-Disposition"],
            'attachment; filename="Jazz_Night__Live__Accounting.pdf"',
        )
        self.assertEqual(response.content, b"%PDF-1.4")

    def test_failed_download_shows_error_without_file(self):
        self.backend.get_event.return_value = make_event()
        self.backend.get_report_pdf.side_effect = BackendError("boom", status=500)
        response = self.client.get(reverse("events:download_report", args=[5, "email-list"]))
        self.assertContains(response, "Failed to download Email List", status_code=502)
        self.assertFalse(response.has_header("Content-Disposition"))

    def test_downloads_page_lists_reports(self):
        self.backend.get_event.return_value = make_event()
        response = self.client.get(reverse("events:downloads", args=[5]))
        self.assertContains(response, "Financial Report")
        self.assertContains(response, reverse("events:download_report", args=[5, "attendee-list"]))
