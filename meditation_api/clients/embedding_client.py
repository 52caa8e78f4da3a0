import logging
import threading
from abc import ABC, abstractmethod
from numbers import Real
from typing import List, Optional

import requests

from meditation_api.exceptions import EmbeddingFailure

logger = logging.getLogger(__name__)


class EmbeddingClient(ABC):
    """Turns text into a vector embedding"""

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """
        Raises:
            EmbeddingFailure: if no usable vector could be obtained
        """

    def close(self):
        """Release transport resources; no-op unless overridden"""


class HttpEmbeddingClient(EmbeddingClient):
    """
    Client for the remote embedding service.
    Sends POST {base_url}/embed with {"text": ...} and expects a JSON list of numbers.
    """

    def __init__(self, base_url: str, timeout: Optional[float] = 30.0,
                 session: Optional[requests.Session] = None):
        self.endpoint = f"{base_url.rstrip('/')}/embed"
        self.timeout = timeout
        # Sessions are not guaranteed thread-safe: one per request thread unless injected
        self.session = session
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._sessions_lock = threading.Lock()

    def _get_session(self) -> requests.Session:
        if self.session is not None:
            return self.session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def embed(self, text: str) -> List[float]:
        logger.info(f"Requesting embedding from {self.endpoint} for text: '{text}'")

        try:
            response = self._get_session().post(
                self.endpoint,
                json={"text": text},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Embedding service call failed: {str(e)}")
            raise EmbeddingFailure(f"Embedding service call failed: {e}", cause=e) from e
        except ValueError as e:
            # Body was not valid JSON
            logger.error(f"Embedding service returned a non-JSON body: {str(e)}")
            raise EmbeddingFailure("Embedding service returned a non-JSON body", cause=e) from e

        embedding = self._parse_embedding(payload)
        logger.info(f"Embedding generated successfully: dimension={len(embedding)}")
        return embedding

    @staticmethod
    def _parse_embedding(payload) -> List[float]:
        if not isinstance(payload, list):
            raise EmbeddingFailure(
                f"Embedding response must be a list, got: {type(payload).__name__}"
            )

        # bool is a Real subclass but never a valid vector component
        if any(isinstance(x, bool) or not isinstance(x, Real) for x in payload):
            raise EmbeddingFailure("Embedding response contains non-numeric elements")

        return [float(x) for x in payload]

    def close(self):
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        if self.session is not None:
            sessions.append(self.session)
        for session in sessions:
            session.close()
