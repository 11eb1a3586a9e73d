"""
tests/test_api.py
==================
API Endpoint Tests — Tounsi Relay

Tests verify POST /audio end to end with fake collaborators:
    1. Response shape for translated and ignored requests
    2. 400 for invalid direction / missing file, 500 for failures
    3. The uploaded file exists during processing and is gone afterwards
       on every path
    4. Static client and health endpoint

All tests are OFFLINE — no OpenAI calls.
"""

import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import MagicMock

# Ensure project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from fastapi.testclient import TestClient

from tounsi_relay.api.upload import create_app, safe_unlink
from tounsi_relay.config import Settings
from tounsi_relay.nlp.context import ContextWindow
from tounsi_relay.nlp.translator import parse_translation
from tounsi_relay.pipeline import RelayService
from tounsi_relay.schemas import Direction

WAV_BYTES = b"RIFF$\x00\x00\x00WAVEfmt \x10\x00\x00\x00"


class _RecordingTranscriber:
    """Returns a fixed transcript and remembers whether the file existed."""

    def __init__(self, transcript="", error=None):
        self.transcript = transcript
        self.error = error
        self.seen_paths = []
        self.existed = []

    def transcribe(self, audio_path, language, prompt):
        self.seen_paths.append(audio_path)
        self.existed.append(os.path.exists(audio_path))
        if self.error is not None:
            raise self.error
        return self.transcript


class _ApiTestCase(unittest.TestCase):

    def setUp(self):
        self.workdir = tempfile.mkdtemp()
        self.upload_dir = os.path.join(self.workdir, "uploads")
        self.static_dir = os.path.join(self.workdir, "public")
        self.settings = Settings(upload_dir=self.upload_dir, static_dir=self.static_dir)

    def tearDown(self):
        shutil.rmtree(self.workdir, ignore_errors=True)

    def _client(self, transcript="", raw_translation=None, error=None):
        self.transcriber = _RecordingTranscriber(transcript, error)
        self.translator = MagicMock()
        self.translator.translate.side_effect = (
            lambda direction, text, context: parse_translation(raw_translation)
        )
        self.service = RelayService(self.settings, self.transcriber, self.translator)
        return TestClient(create_app(self.settings, self.service))

    def _post(self, client, direction="de2tn", files=True):
        data = {} if direction is None else {"direction": direction}
        kwargs = {"data": data}
        if files:
            kwargs["files"] = {"audio": ("clip.webm", WAV_BYTES, "audio/wav")}
        return client.post("/audio", **kwargs)

    def assertUploadsRemoved(self):
        leftover = os.listdir(self.upload_dir) if os.path.isdir(self.upload_dir) else []
        self.assertEqual(leftover, [])


class TestAudioEndpoint(_ApiTestCase):

    def test_translated_response(self):
        client = self._client(
            "Was machst du?",
            '{"target_arabic":"شنوة تعمل","target_latin":"chnowa taamel"}',
        )
        response = self._post(client, "de2tn")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {
                "direction": "de2tn",
                "ignored": False,
                "source_text": "Was machst du?",
                "source_latin": "",
                "target_de": "",
                "target_arabic": "شنوة تعمل",
                "target_latin": "chnowa taamel",
            },
        )
        self.assertEqual(
            self.service.context.window(Direction.DE2TN),
            ContextWindow("Was machst du?", "شنوة تعمل / chnowa taamel"),
        )
        self.assertEqual(self.transcriber.existed, [True])
        self.assertTrue(self.transcriber.seen_paths[0].endswith(".wav"))
        self.assertFalse(os.path.exists(self.transcriber.seen_paths[0]))
        self.assertUploadsRemoved()

    def test_ignored_noise_response(self):
        client = self._client("abonniert den kanal")
        response = self._post(client, "tn2de")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["ignored"])
        self.assertEqual(body["direction"], "tn2de")
        for key in ("source_text", "source_latin", "target_de", "target_arabic", "target_latin"):
            self.assertEqual(body[key], "")
        self.translator.translate.assert_not_called()
        self.assertUploadsRemoved()

    def test_ignored_unparsable_translation(self):
        client = self._client("Was machst du?", "kein json")
        response = self._post(client)

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["ignored"])
        self.assertEqual(self.service.context.window(Direction.DE2TN), ContextWindow())
        self.assertUploadsRemoved()

    def test_direction_defaults_to_tn2de(self):
        client = self._client("aslema", '{"source_latin": "aslema", "target_de": "Hallo"}')
        response = self._post(client, direction=None)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["direction"], "tn2de")
        self.assertEqual(response.json()["target_de"], "Hallo")

    def test_invalid_direction(self):
        client = self._client("Was machst du?", '{"target_latin": "x"}')
        response = self._post(client, "de2fr")

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())
        self.assertEqual(self.transcriber.seen_paths, [])
        self.assertUploadsRemoved()

    def test_missing_audio(self):
        client = self._client("Was machst du?")
        response = self._post(client, files=False)

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

    def test_transcriber_failure_is_500(self):
        client = self._client(error=RuntimeError("Whisper transcription failed"))
        response = self._post(client)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Fehler beim Verarbeiten"})
        self.assertUploadsRemoved()

    def test_translator_failure_is_500(self):
        client = self._client("Was machst du?")
        self.translator.translate.side_effect = ConnectionError("down")
        response = self._post(client)

        self.assertEqual(response.status_code, 500)
        self.assertUploadsRemoved()

    def test_each_request_gets_its_own_file(self):
        client = self._client("Was machst du?", '{"target_latin": "chnowa taamel"}')
        self._post(client)
        self._post(client)

        self.assertEqual(len(set(self.transcriber.seen_paths)), 2)
        self.assertUploadsRemoved()


class TestAppExtras(_ApiTestCase):

    def test_health(self):
        response = self._client().get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_static_client_served(self):
        os.makedirs(self.static_dir)
        with open(os.path.join(self.static_dir, "index.html"), "w", encoding="utf-8") as fh:
            fh.write("<html><body>Tounsi Relay</body></html>")

        response = self._client().get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn("Tounsi Relay", response.text)

    def test_missing_static_dir_not_mounted(self):
        response = self._client().get("/")
        self.assertEqual(response.status_code, 404)


class TestSafeUnlink(unittest.TestCase):

    def test_none_and_missing_paths(self):
        safe_unlink(None)
        safe_unlink("")
        safe_unlink(os.path.join(tempfile.gettempdir(), "does-not-exist-tounsi.wav"))

    def test_removes_file(self):
        handle = tempfile.NamedTemporaryFile(delete=False)
        handle.close()
        safe_unlink(handle.name)
        self.assertFalse(os.path.exists(handle.name))

    def test_directory_error_swallowed(self):
        directory = tempfile.mkdtemp()
        try:
            safe_unlink(directory)
            self.assertTrue(os.path.isdir(directory))
        finally:
            os.rmdir(directory)


if __name__ == "__main__":
    unittest.main()
