from unittest import TestCase

from labsite.lib.validation.exceptions import ValidationError
from labsite.lib.validation.video import (
    extract_youtube_id,
    validate_video_description,
    validate_video_title,
    validate_youtube_url,
)


class TestYouTubeUrls(TestCase):
    def test_watch_url(self):
        self.assertEqual(extract_youtube_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s"), "dQw4w9WgXcQ")

    def test_short_url(self):
        self.assertEqual(extract_youtube_id("https://youtu.be/dQw4w9WgXcQ?si=abc"), "dQw4w9WgXcQ")

    def test_embed_and_legacy_urls(self):
        self.assertEqual(extract_youtube_id("https://www.youtube.com/embed/dQw4w9WgXcQ"), "dQw4w9WgXcQ")
        self.assertEqual(extract_youtube_id("https://www.youtube.com/v/dQw4w9WgXcQ"), "dQw4w9WgXcQ")

    def test_url_without_video_id(self):
        self.assertIsNone(extract_youtube_id("https://www.youtube.com/channel/UC123"))

    def test_valid_url_is_trimmed(self):
        self.assertEqual(validate_youtube_url(" https://youtu.be/dQw4w9WgXcQ "), "https://youtu.be/dQw4w9WgXcQ")

    def test_non_youtube_url(self):
        with self.assertRaises(ValidationError) as exc_info:
            validate_youtube_url("https://vimeo.com/123456")
        self.assertEqual(exc_info.exception.field, "youtubeUrl")

    def test_youtube_url_without_video_id(self):
        with self.assertRaises(ValidationError):
            validate_youtube_url("https://www.youtube.com/channel/UC123")

    def test_not_a_url(self):
        with self.assertRaises(ValidationError):
            validate_youtube_url("youtube dQw4w9WgXcQ")


class TestVideoFields(TestCase):
    def test_title_is_trimmed(self):
        self.assertEqual(validate_video_title("  Lab Talk "), "Lab Talk")

    def test_blank_title(self):
        with self.assertRaises(ValidationError):
            validate_video_title("   ")

    def test_long_title(self):
        with self.assertRaises(ValidationError):
            validate_video_title("a" * 501)

    def test_long_description(self):
        self.assertIsNone(validate_video_description(None))
        with self.assertRaises(ValidationError):
            validate_video_description("a" * 5001)
