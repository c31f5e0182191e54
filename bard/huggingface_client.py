from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from apis.huggingface import post_inference
from bard.config import BardConfig
from bard.errors import AuthenticationError, ModelAccessError, ProviderError, ProviderTransportError
from bard.logging_utils import get_logger

log = get_logger(__name__)


def _response_detail(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.reason or ""
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return resp.reason or ""


def error_for_response(model: str, resp: requests.Response) -> ProviderError:
    """Turn a failed HTTP response into a typed provider error."""
    detail = _response_detail(resp)
    status = resp.status_code
    if status in (401, 403):
        return AuthenticationError(f"Hugging Face rejected credentials for {model}: {detail}", status)
    if status == 404:
        return ModelAccessError(f"model {model} not found or not accessible: {detail}", status)
    return ProviderTransportError(f"Hugging Face request for {model} failed ({status}): {detail}", status)


class HuggingFaceClient:
    """Thin wrapper over the Inference API that raises ProviderError subclasses."""

    def __init__(self, token: str, base_url: str, timeout: float = 120.0) -> None:
        self.token = token
        self.base_url = base_url
        self.timeout = timeout

    def _post(self, model: str, payload: Dict[str, Any]) -> requests.Response:
        log.debug("huggingface POST", extra={"model": model})
        try:
            resp = post_inference(model, payload, self.token, base_url=self.base_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            log.error("huggingface request failed", extra={"model": model, "error": str(e)})
            raise ProviderTransportError(f"Hugging Face request for {model} failed: {e}") from e
        if not resp.ok:
            error = error_for_response(model, resp)
            log.error("huggingface error response", extra={"model": model, "status": resp.status_code})
            raise error
        return resp

    def text_generation(self, model: str, inputs: str, parameters: Optional[Dict[str, Any]] = None) -> str:
        resp = self._post(model, {"inputs": inputs, "parameters": parameters or {}})
        try:
            body = resp.json()
        except ValueError as e:
            raise ProviderTransportError(f"non-JSON text generation response from {model}") from e
        if isinstance(body, list) and body:
            body = body[0]
        if not isinstance(body, dict) or "generated_text" not in body:
            raise ProviderTransportError(f"unexpected text generation response from {model}: {body!r:.200}")
        return str(body["generated_text"])

    def inference_bytes(self, model: str, inputs: str) -> bytes:
        return self._post(model, {"inputs": inputs}).content


class HuggingFaceLyricsProvider:
    """DeepSeek-R1 style lyrics generation: prompt starts with <think>, no system prompt."""

    def __init__(self, client: HuggingFaceClient, model: str) -> None:
        self.client = client
        self.model = model

    def generate_lyrics(self, prompt: str, max_length: int, temperature: float) -> str:
        return self.client.text_generation(self.model, f"<think>\n{prompt}", {
            "max_new_tokens": max_length,
            "temperature": temperature,
            "return_full_text": False,
            "do_sample": True,
            "top_p": 0.9,
            "repetition_penalty": 1.1,
        })


class HuggingFaceVocalsProvider:
    def __init__(self, client: HuggingFaceClient, model: str) -> None:
        self.client = client
        self.model = model

    def synthesize(self, line: str) -> bytes:
        return self.client.inference_bytes(self.model, line)


class HuggingFaceMusicProvider:
    def __init__(self, client: HuggingFaceClient, model: str) -> None:
        self.client = client
        self.model = model

    def generate_music(self, prompt: str) -> bytes:
        return self.client.inference_bytes(self.model, prompt)


def client_from_config(config: BardConfig) -> HuggingFaceClient:
    return HuggingFaceClient(config.hf_token, config.api_base_url, config.request_timeout)
