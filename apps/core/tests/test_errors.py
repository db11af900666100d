from django.test import SimpleTestCase

from apps.core.errors import (
    KilledItError,
    RemoteFailure,
    Unauthenticated,
    Unauthorized,
    ValidationFailed,
)


class ErrorStatusTest(SimpleTestCase):

    def test_default_statuses(self):
        self.assertEqual(Unauthenticated().status_code, 401)
        self.assertEqual(Unauthorized("no").status_code, 403)
        self.assertEqual(ValidationFailed("bad").status_code, 400)
        self.assertEqual(RemoteFailure("down").status_code, 502)
        self.assertEqual(KilledItError("boom").status_code, 500)

    def test_status_override_is_per_instance(self):
        err = RemoteFailure("Tenor API error: 429", status_code=429)
        self.assertEqual(err.status_code, 429)
        self.assertEqual(RemoteFailure("again").status_code, 502)

    def test_message(self):
        self.assertEqual(Unauthenticated().message, "Not authenticated")
        self.assertEqual(str(ValidationFailed("Blurb too long")), "Blurb too long")
