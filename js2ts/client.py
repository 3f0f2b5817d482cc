import logging
import re
import time
from typing import Callable, Optional

import requests

from .config import Settings
from .errors import (
    ApiError,
    AuthError,
    MalformedResponse,
    NetworkError,
    RateLimited,
    ValidationFailure,
)
from .models import CandidateFile
from .retry import RetryPolicy, call_with_retry

logger = logging.getLogger(__name__)

CODE_KEYWORDS_RE = re.compile(r'\b(import|export|function|const|let|var|class|interface|type)\b')
# A log line that leaked into the model output, e.g. "[2025-01-02 10:00:00] Error: ..."
LOG_ARTIFACT_RE = re.compile(r'^\[\d{4}-\d{2}-\d{2}[^\]]*\] Error:', re.MULTILINE)
FENCE_LINE_RE = re.compile(r'^```[a-z]*\s*$')

PROMPT_RULES = """1. Output ONLY valid TypeScript code - no explanations, markdown, or code blocks
2. Use minimal typing - prefer 'any' for unclear types rather than complex inference
3. Add basic interface definitions for props/state using 'any' for properties if needed
4. Keep exact same functionality - only add necessary type annotations
5. Preserve all comments and code structure
6. Update imports: .js → .ts, .jsx → .tsx
7. For React components, use simple function declarations with basic prop types
8. Do not refactor or reorganize code
9. Start output immediately with code - no preamble"""


def build_prompt(content: str, component_likely: bool) -> str:
    kind = 'JavaScript React' if component_likely else 'JavaScript'
    return (
        f"Convert this {kind} code to TypeScript. Follow these rules:\n\n"
        f"{PROMPT_RULES}\n\n"
        f"Code:\n{content}"
    )


def strip_code_fences(text: str) -> str:
    """Drop lines that are only a markdown fence, such as ``` or ```tsx."""
    lines = [line for line in text.splitlines() if not FENCE_LINE_RE.match(line)]
    return '\n'.join(lines).strip('\n')


def validate_typescript_code(text: str) -> bool:
    """
    Cheap plausibility check on model output.

    Rejects empty text, text containing leaked log lines, and text without a
    single common declaration keyword.
    """
    if not text or not text.strip():
        return False
    if LOG_ARTIFACT_RE.search(text):
        return False
    return bool(CODE_KEYWORDS_RE.search(text))


def extract_output_text(body) -> Optional[str]:
    """
    Find the generated text in a responses-style payload.

    Prefers the first output_text part of the first message item, then the
    legacy output[1].content[0].text position, then a top-level output_text.
    """
    if not isinstance(body, dict):
        return None
    output = body.get('output')
    if isinstance(output, list):
        for item in output:
            if not isinstance(item, dict) or item.get('type') != 'message':
                continue
            for part in item.get('content') or []:
                if isinstance(part, dict) and part.get('type') == 'output_text' and part.get('text'):
                    return part['text']
        try:
            text = output[1]['content'][0]['text']
            if isinstance(text, str) and text:
                return text
        except (IndexError, KeyError, TypeError):
            pass
    text = body.get('output_text')
    if isinstance(text, str) and text:
        return text
    return None


def _error_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or 'Unknown error'
    if isinstance(body, dict):
        error = body.get('error')
        if isinstance(error, dict) and error.get('message'):
            return str(error['message'])
        if error:
            return str(error)
    return 'Unknown error'


class ConversionClient:
    """Sends one file at a time to the remote model and returns validated TypeScript."""

    def __init__(self, settings: Settings, session=None, sleep: Callable[[float], None] = time.sleep):
        self.settings = settings
        self.session = session or requests.Session()
        self.sleep = sleep
        self.policy = RetryPolicy(max_attempts=settings.max_retries, retry_delay=settings.retry_delay)

    def request_conversion(self, path, prompt: str, attempt: int = 1) -> str:
        """Perform a single API call and classify the outcome."""
        payload = {'model': self.settings.model, 'input': prompt}
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f"Bearer {self.settings.api_key}",
        }
        try:
            response = self.session.post(
                self.settings.endpoint,
                json=payload,
                headers=headers,
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as e:
            raise NetworkError(f"network error: {e}") from e

        status_code = response.status_code
        if status_code == 401:
            raise AuthError('authentication failed (HTTP 401)')
        if status_code == 429:
            raise RateLimited('rate limited (HTTP 429)')
        if not 200 <= status_code < 300:
            raise ApiError(f"HTTP {status_code}: {_error_message(response)}", status_code=status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponse('response body is not JSON') from e
        if not isinstance(body, dict):
            raise MalformedResponse('response body is not a JSON object')

        status = body.get('status')
        if status == 'failed':
            raise ApiError(f"API returned failed status: {_error_message(response)}", status_code=status_code)
        if status != 'completed':
            raise MalformedResponse(f"unexpected API status {status!r}")

        text = extract_output_text(body)
        if not text:
            raise MalformedResponse('empty response')

        text = strip_code_fences(text)
        if not validate_typescript_code(text):
            raise ValidationFailure('invalid TypeScript output')

        logger.debug(f"Received {len(text)} characters for {path} (attempt {attempt}/{self.policy.max_attempts})")
        return text

    def convert(self, candidate: CandidateFile) -> str:
        """
        Convert one file, retrying per the client's RetryPolicy.

        Raises:
            AuthError: credentials rejected, raised on the first attempt.
            ExhaustedRetries: every attempt failed.
        """
        prompt = build_prompt(candidate.content, candidate.component_likely)
        text = call_with_retry(
            lambda attempt: self.request_conversion(candidate.path, prompt, attempt),
            policy=self.policy,
            sleep=self.sleep,
            describe=f"conversion of {candidate.path}",
        )
        logger.info(f"Successfully converted {candidate.path}")
        return text
