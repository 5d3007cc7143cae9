import asyncio
from types import SimpleNamespace

import pytest

from advisor import build_eco_tip_prompt, generate_eco_tips
from analyzer import build_result
from errors import AdvisoryUnavailable, UnknownModel


class FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content(self, model, contents, config=None):
        self.calls.append((model, contents))
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def fake_client(text=None, error=None):
    return SimpleNamespace(aio=SimpleNamespace(models=FakeModels(text, error)))


@pytest.fixture
def result(make_metrics):
    return build_result('https://a.example', make_metrics(1_000_000, green=True, requests=42, load_ms=2100))


class TestBuildPrompt:
    def test_includes_formatted_metrics(self, result):
        prompt = build_eco_tip_prompt(result)
        assert 'Page size: 976.56 KB' in prompt
        assert 'Requests: 42' in prompt
        assert 'Load time: 2100ms' in prompt
        assert 'OneByte Grade: B' in prompt
        assert 'Green Hosting: Yes' in prompt

    def test_other_model(self, result):
        assert 'SWD Grade: ' in build_eco_tip_prompt(result, 'swd')

    def test_unknown_model(self, result):
        with pytest.raises(UnknownModel):
            build_eco_tip_prompt(result, 'nope')


class TestGenerateEcoTips:
    def test_returns_text(self):
        client = fake_client(text='- Compress images')
        assert asyncio.run(generate_eco_tips('prompt', client=client)) == '- Compress images'
        assert client.aio.models.calls[0][1] == 'prompt'

    def test_call_failure(self):
        client = fake_client(error=RuntimeError('quota'))
        with pytest.raises(AdvisoryUnavailable):
            asyncio.run(generate_eco_tips('prompt', client=client))

    def test_empty_response(self):
        with pytest.raises(AdvisoryUnavailable):
            asyncio.run(generate_eco_tips('prompt', client=fake_client(text='')))
