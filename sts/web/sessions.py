"""
Sessions de connexion de l'interface web

Le SessionStore associe un jeton opaque (cookie 'sid') à une session.
Il appartient à l'application web et n'est pas un état global du module.
"""

import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass
class Session:
    token: str
    username: str
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class SessionStore:
    """
    Sessions en mémoire avec durée de vie fixe

    Une session expirée est supprimée dès qu'on la consulte.
    """

    def __init__(self, lifetime: int, clock: Callable[[], float] = time.time):
        """
        Args:
            lifetime: Durée de vie d'une session en secondes
            clock: Source de temps (remplaçable dans les tests)
        """
        self.lifetime = lifetime
        self.clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, Session] = {}

    def create(self, username: str) -> str:
        """
        Ouvre une session

        Returns:
            str: Jeton de session (32 caractères hexadécimaux)
        """
        now = self.clock()
        token = secrets.token_hex(16)
        with self._lock:
            self._sessions[token] = Session(token, username, now, now + self.lifetime)
        return token

    def get(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.is_expired(self.clock()):
                del self._sessions[token]
                return None
            return session

    def destroy(self, token: Optional[str]) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def purge_expired(self) -> int:
        """
        Supprime toutes les sessions expirées

        Returns:
            int: Nombre de sessions supprimées
        """
        now = self.clock()
        with self._lock:
            expired = [token for token, session in self._sessions.items() if session.is_expired(now)]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
