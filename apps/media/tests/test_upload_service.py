"""
Unit tests for the media upload service.
Storage is mocked; nothing is written to disk or S3.
"""
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client, TestCase

from apps.core.errors import RemoteFailure, ValidationFailed
from apps.media.upload_service import (
    MAX_IMAGE_SIZE,
    upload_media,
    validate_upload_file,
)

MB = 1024 * 1024


def make_file(name, content_type, size):
    return SimpleUploadedFile(name, b'\0' * size, content_type=content_type)


class ValidateUploadFileTest(TestCase):

    def test_image_within_limit(self):
        is_valid, error = validate_upload_file(make_file('logo.jpg', 'image/jpeg', 5 * MB))
        self.assertTrue(is_valid)
        self.assertIsNone(error)

    def test_image_over_limit(self):
        is_valid, error = validate_upload_file(make_file('huge.jpg', 'image/jpeg', MAX_IMAGE_SIZE + 1))
        self.assertFalse(is_valid)
        self.assertIn('10MB', error)

    def test_video_gets_larger_ceiling(self):
        is_valid, _ = validate_upload_file(make_file('demo.mp4', 'video/mp4', 40 * MB))
        self.assertTrue(is_valid)

    def test_unsupported_type(self):
        is_valid, error = validate_upload_file(make_file('deck.pdf', 'application/pdf', 100))
        self.assertFalse(is_valid)
        self.assertIn('Unsupported file type', error)


@patch('apps.media.upload_service.default_storage')
class UploadMediaTest(TestCase):

    def configure(self, storage):
        storage.save.side_effect = lambda path, file: path
        storage.url.side_effect = lambda path: f"https://cdn.test/{path}"

    def test_oversized_image_uploads_nothing(self, storage):
        self.configure(storage)
        with self.assertRaises(ValidationFailed):
            upload_media([make_file('huge.jpg', 'image/jpeg', 11 * MB)])
        storage.save.assert_not_called()

    def test_single_image(self, storage):
        self.configure(storage)
        urls = upload_media([make_file('logo.JPG', 'image/jpeg', 5 * MB)])

        self.assertEqual(len(urls), 1)
        self.assertRegex(urls[0], r'^https://cdn\.test/startup-logos/\d+-[0-9a-f]{9}\.jpg$')

    def test_one_bad_file_blocks_the_batch(self, storage):
        self.configure(storage)
        files = [
            make_file('a.png', 'image/png', 100),
            make_file('b.exe', 'application/octet-stream', 100),
        ]
        with self.assertRaises(ValidationFailed):
            upload_media(files)
        storage.save.assert_not_called()

    def test_urls_keep_input_order(self, storage):
        self.configure(storage)
        files = [make_file(f'{i}.png', 'image/png', 10) for i in range(6)]

        urls = upload_media(files, bucket='comments')

        self.assertEqual(len(urls), 6)
        self.assertTrue(all(u.startswith('https://cdn.test/comments/') for u in urls))
        saved = [call.args[0] for call in storage.save.call_args_list]
        self.assertCountEqual(saved, [u.removeprefix('https://cdn.test/') for u in urls])

    def test_storage_failure_is_remote_failure(self, storage):
        storage.save.side_effect = OSError("bucket unavailable")
        with self.assertRaises(RemoteFailure):
            upload_media([make_file('a.png', 'image/png', 10)])

    def test_empty_batch(self, storage):
        self.assertEqual(upload_media([]), [])
        storage.save.assert_not_called()


class UploadAPITest(TestCase):

    def test_requires_session(self):
        response = Client().post('/api/media/upload', {'files': make_file('a.png', 'image/png', 10)})
        self.assertEqual(response.status_code, 401)

    @patch('apps.media.upload_service.default_storage')
    def test_upload(self, storage):
        storage.save.side_effect = lambda path, file: path
        storage.url.side_effect = lambda path: f"/media/{path}"
        account = get_user_model().objects.create_user(username='uploader', password='testpass123')
        client = Client()
        client.force_login(account)

        response = client.post('/api/media/upload', {'files': [
            make_file('a.png', 'image/png', 10),
            make_file('b.webm', 'video/webm', 10),
        ]})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()['urls']), 2)

    def test_rejected_file_is_400(self):
        account = get_user_model().objects.create_user(username='uploader', password='testpass123')
        client = Client()
        client.force_login(account)
        response = client.post('/api/media/upload', {'files': make_file('x.pdf', 'application/pdf', 10)})
        self.assertEqual(response.status_code, 400)
        self.assertIn('Unsupported file type', response.json()['error'])
