"""Tests for the Lex interactor."""

import threading
from unittest.mock import MagicMock

import pytest

from conftest import StubLexRuntimeClient
from lex_node.configuration import AUDIO_MIME_TYPE, LexConfiguration, ResponseContentType
from lex_node.errors import ErrorCode, RemoteCallFailedError
from lex_node.interactor import LexInteractor, build_lex_interactor
from lex_node.lex_client import BotoLexRuntimeClient, LexRuntimeClient
from lex_node.parameters import DictParameterReader
from lex_node.schemas import AudioTextConversationRequest, PostContentResult


class TestBuildRequest:
    def test_text_request(self, configuration, text_request):
        lex_request = LexInteractor(configuration, StubLexRuntimeClient()).build_request(text_request)
        assert lex_request.bot_name == "test_bot"
        assert lex_request.bot_alias == "superbot"
        assert lex_request.user_id == "test_user"
        assert lex_request.content_type == "text/plain; charset=utf-8"
        assert lex_request.accept_type == "text/plain; charset=utf-8"
        assert lex_request.input_stream == b"make a reservation"

    def test_audio_request(self, configuration):
        request = AudioTextConversationRequest(
            content_type="audio/l16; rate=16000; channels=1",
            accept_type="audio/pcm",
            text_request="ignored",
            audio_request=b"\x01\x02\x03",
        )
        lex_request = LexInteractor(configuration, StubLexRuntimeClient()).build_request(request)
        assert lex_request.input_stream == b"\x01\x02\x03"

    def test_accept_type_defaults_to_configured_content(self):
        configuration = LexConfiguration("u", "b", "a", ResponseContentType.AUDIO)
        request = AudioTextConversationRequest(content_type="text/plain; charset=utf-8", text_request="hi")
        lex_request = LexInteractor(configuration, StubLexRuntimeClient()).build_request(request)
        assert lex_request.accept_type == AUDIO_MIME_TYPE


class TestPostContent:
    def test_calls_client_once(self, configuration, text_request):
        client = StubLexRuntimeClient(True)
        result = LexInteractor(configuration, client).post_content(text_request)
        assert isinstance(result, PostContentResult)
        assert len(client.requests) == 1

    def test_service_error_becomes_remote_call_failed(self, configuration, text_request):
        client = StubLexRuntimeClient(False)
        with pytest.raises(RemoteCallFailedError) as exc_info:
            LexInteractor(configuration, client).post_content(text_request)
        assert exc_info.value.error_code == ErrorCode.REMOTE_CALL_FAILED
        assert len(client.requests) == 1

    def test_unexpected_client_error_becomes_remote_call_failed(self, configuration, text_request):
        client = MagicMock(spec=LexRuntimeClient)
        client.post_content.side_effect = TimeoutError("read timed out")
        with pytest.raises(RemoteCallFailedError):
            LexInteractor(configuration, client).post_content(text_request)

    def test_concurrent_calls_do_not_overlap(self, configuration, text_request):
        client = StubLexRuntimeClient(True, delay=0.05)
        interactor = LexInteractor(configuration, client)

        threads = [
            threading.Thread(target=interactor.post_content, args=(text_request,))
            for _ in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(client.requests) == 4
        assert client.max_in_flight == 1


class TestBuildLexInteractor:
    def test_invalid_configuration(self):
        error_code, interactor = build_lex_interactor(DictParameterReader())
        assert error_code == ErrorCode.INVALID_LEX_CONFIGURATION
        assert interactor is None

    def test_unknown_content_type(self):
        reader = DictParameterReader({
            "lex_configuration/user_id": "u",
            "lex_configuration/bot_name": "b",
            "lex_configuration/bot_alias": "a",
            "lex_configuration/content_type": "video",
        })
        error_code, interactor = build_lex_interactor(reader)
        assert error_code == ErrorCode.INVALID_LEX_CONFIGURATION
        assert interactor is None

    def test_with_injected_client(self, param_reader, configuration):
        client = StubLexRuntimeClient()
        error_code, interactor = build_lex_interactor(param_reader, client=client)
        assert error_code == ErrorCode.SUCCESS
        assert interactor.configuration == configuration
        assert interactor.session_key == configuration.session_key

    def test_builds_boto_client_from_params(self, param_reader, monkeypatch):
        created = {}

        def fake_from_params(reader, separator="/", session=None):
            created["separator"] = separator
            return StubLexRuntimeClient()

        monkeypatch.setattr(BotoLexRuntimeClient, "from_params", staticmethod(fake_from_params))
        error_code, interactor = build_lex_interactor(param_reader)
        assert error_code == ErrorCode.SUCCESS
        assert created["separator"] == "/"


class TestAudioBody:
    def test_body_is_drained_inside_the_call(self, configuration, text_request):
        result = LexInteractor(configuration, StubLexRuntimeClient(True)).post_content(text_request)
        assert result.audio_stream is None
        assert result.audio_bytes == b"blah blah blah"

    def test_body_read_failure_becomes_remote_call_failed(self, configuration, text_request):
        stream = MagicMock()
        stream.read.side_effect = ConnectionResetError("peer closed the stream")
        client = StubLexRuntimeClient(True, result=PostContentResult(message="hi", audio_stream=stream))

        with pytest.raises(RemoteCallFailedError):
            LexInteractor(configuration, client).post_content(text_request)
