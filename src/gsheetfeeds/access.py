from collections.abc import Iterable
from pathlib import Path
import json
import copy
import logging

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import AuthorizedSession, Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

logger = logging.getLogger(__name__)

class __GDataAccess():
    """
    Authenticated access to the Google Spreadsheets feeds.
    Once you've obtained a client secrets file from the cloud console point the
    object at it.  For OAuth the first connect() walks through the consent screens,
    after that the refresh token is kept in the credential cache so it doesn't need
    to happen again.

    There's only ever one authenticated session per application so this is a module
    singleton.  What clients actually want is an authorized HTTP session to hand to
    a SpreadsheetServiceRequest, which is what get_session() gives them.
    """

    __SCOPES = {
        "feeds": "https://spreadsheets.google.com/feeds",
        "spreadsheets": "https://www.googleapis.com/auth/spreadsheets",
        "spreadsheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
        "drive-file": "https://www.googleapis.com/auth/drive.file",
        "drive": "https://www.googleapis.com/auth/drive",
        "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
    }
    __SCOPE_URL_PREFIXES = ("https://www.googleapis.com/", "https://spreadsheets.google.com/")

    __DEFAULT_AUTH_PROMPT_MSG = "Please visit this URL to authorize spreadsheet access: {url}"
    __DEFAULT_AUTH_FLOW_SUCCESS_MSG = "Authorization complete, you may close this window."
    __DEFAULT_SECRETS = (Path.home() / "gws_client_secrets.json").absolute()
    __DEFAULT_CACHE = (Path.home() / "gws_tokens.json").absolute()

    def __init__(self) -> None:
        self.reset()

    def __bool__(self) -> bool:
        """True if we are connected and authenticated"""
        return self.connected

    def __str__(self) -> str:
        if self.connected:
            return f"Connected:{str(self.session_scopes)}"
        return f"Disconnected:{str(self.__scopes)}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @classmethod
    def get_scope(cls, scope: str) -> str:
        """
        Get a scope based on simplified label.
        A raw URL is accepted as is.
        """
        s = str(scope)
        sc = cls.__SCOPES.get(s, "")
        if not sc and s.startswith(cls.__SCOPE_URL_PREFIXES):
            sc = s
        return sc

    @property
    def client_secrets(self) -> Path:
        """
        Path to client secrets file as provided by Google when generating access credentials.
        """
        return self.__secrets

    @client_secrets.setter
    def client_secrets(self, value: Path|str) -> None:
        val = value if isinstance(value, Path) else Path(str(value))
        if val != self.__secrets:
            self.__secrets = val
            if self.connected:
                self.connect()

    @property
    def cred_cache(self) -> Path:
        """
        Path to local credential cache to not have to do full authentication each time.
        """
        return self.__cache

    @cred_cache.setter
    def cred_cache(self, value: Path|str) -> None:
        val = value if isinstance(value, Path) else Path(str(value))
        if val != self.__cache:
            self.__cache = val
            if self.connected:
                self.connect()

    @property
    def connected(self) -> bool:
        return bool(self.__creds) and bool(self.__creds.valid)

    @property
    def session_scopes(self) -> list[str]:
        """
        Scopes granted by Google for this session, as opposed to self.scopes
        which is what is requested.
        """
        if self.connected:
            return list(self.__creds.scopes or [])
        return []

    @property
    def scopes(self) -> list[str]:
        return self.__scopes

    @scopes.setter
    def scopes(self, value: None|list[str]|str) -> None:
        """
        Replace the requested scopes.  Unknown labels are dropped.
        """
        self.__scopes = self._to_scope_list(value)
        if self.__scopes and self.connected:
            self.refresh()
        else:
            self.__creds = None
            self.__session = None

    def _to_scope_list(self, value) -> list[str]:
        slist = []
        if value is None:
            return slist
        values = [value] if isinstance(value, str) or not isinstance(value, Iterable) else value
        for v in values:
            s = self.get_scope(str(v))
            if s and s not in slist:
                slist.append(s)
        return slist

    def append_scopes(self, *args) -> bool:
        """
        Add to the requested scopes, reconnecting if any are new to the session.
        """
        for s in self._to_scope_list(list(args)):
            if s not in self.__scopes:
                self.__scopes.append(s)
        return self.refresh()

    @property
    def creds(self) -> Credentials|None:
        return self.__creds

    @property
    def config(self) -> dict:
        """
        All configuration state as a dict, for pushing into a json/toml/ini file.
        """
        return {
            'secrets': str(self.__secrets),
            'cache': str(self.__cache),
            'scopes': list(self.__scopes),
            'server': self.auth_server,
            'port': self.auth_port,
            'auth_prompt_msg': self.auth_prompt_msg,
            'flow_success_msg': self.auth_flow_success_msg
        }

    @config.setter
    def config(self, config: dict) -> None:
        """
        Set configuration state from a dict, keys as produced by the getter.
        Missing keys keep their current value.
        """
        reconnect = False
        v = config.get('port', None)
        if v is not None:
            self.auth_port = int(v)
        v = config.get('server', None)
        if v is not None:
            self.auth_server = str(v)
        v = config.get('scopes', [])
        if v:
            self.__scopes = self._to_scope_list(v)
            reconnect = True
        v = config.get('cache', None)
        if v is not None:
            self.__cache = Path(v)
            reconnect = True
        v = config.get('secrets', None)
        if v is not None:
            self.__secrets = Path(v)
            reconnect = True
        v = config.get('auth_prompt_msg', None)
        if v is not None:
            self.auth_prompt_msg = str(v)
        v = config.get('flow_success_msg', None)
        if v is not None:
            self.auth_flow_success_msg = str(v)
        if reconnect and self.connected:
            self.connect()

    def reset(self) -> None:
        """
        Reset all connection state to defaults.
        """
        self.__secrets = self.__DEFAULT_SECRETS
        self.__cache = self.__DEFAULT_CACHE
        self.__creds = None
        self.__scopes = []
        self.__session = None
        self.auth_server = 'localhost'
        self.auth_port = 0
        self.auth_prompt_msg = self.__DEFAULT_AUTH_PROMPT_MSG
        self.auth_flow_success_msg = self.__DEFAULT_AUTH_FLOW_SUCCESS_MSG

    def refresh(self) -> bool:
        """
        If any requested scope is missing from the current session, reconnect.
        """
        scopes_accounted = all(s in self.session_scopes for s in self.__scopes)
        if self.connected and not scopes_accounted:
            return self.connect()
        return True

    def _load_cache(self, requested_scopes: list[str]) -> None:
        if not (self.__cache.exists() and self.__cache.is_file()):
            return
        # the cache doesn't get invalidated by Google when scopes change
        # so check it covers everything we're asking for
        cf = self.__cache.resolve()
        with open(cf, 'r', encoding='utf-8') as f:
            scopes = json.load(f).get('scopes', [])
        if all(s in scopes for s in requested_scopes):
            self.__creds = Credentials.from_authorized_user_file(str(cf), requested_scopes)
        else:
            self.__cache.unlink()

    def _save_cache(self, requested_scopes: list[str]) -> None:
        refresh_token = getattr(self.__creds, 'refresh_token', None)
        if not refresh_token:
            # default credentials (service accounts) have nothing to cache
            return
        user_info = {'refresh_token': refresh_token, 'client_id': self.__creds.client_id,
                     'client_secret': self.__creds.client_secret, 'scopes': requested_scopes}
        with open(self.__cache.resolve(), 'w', encoding='utf-8') as f:
            json.dump(user_info, f, ensure_ascii=False, indent=2)

    def connect(self) -> bool:
        """
        Establish a new authentication session.
        Order of preference is the credential cache, a refresh of the cached
        token, the installed app OAuth flow from the client secrets and finally
        the application default credentials.
        """
        self.__creds = None
        self.__session = None
        if not self.__scopes:
            return False
        requested_scopes = copy.copy(self.__scopes)
        self._load_cache(requested_scopes)
        if not self.connected and self.__creds and self.__creds.refresh_token:
            try:
                self.__creds.refresh(Request())
            except google.auth.exceptions.RefreshError as e:
                logger.warning("failed to refresh stored creds: %s...deleting cred cache and re-authorizing", e)
            if not self.connected:
                self.__creds = None
                self.__cache.unlink(missing_ok=True)

        if not self.connected:
            if self.__secrets.exists() and self.__secrets.is_file():
                flow = InstalledAppFlow.from_client_secrets_file(str(self.__secrets), requested_scopes)
                self.__creds = flow.run_local_server(host=self.auth_server, port=self.auth_port,
                                                     authorization_prompt_message=self.auth_prompt_msg,
                                                     success_message=self.auth_flow_success_msg)
            else:
                # this will look at the GOOGLE_APPLICATION_CREDENTIALS envvar and
                # other cloud default locations
                try:
                    self.__creds, _ = google.auth.default(scopes=requested_scopes)
                    if not self.__creds.valid:
                        self.__creds.refresh(Request())
                except google.auth.exceptions.DefaultCredentialsError:
                    logger.warning("no client secrets at %s and no default credentials available",
                                   self.__secrets)
                    self.__creds = None

        if self.connected:
            self._save_cache(requested_scopes)
        return self.connected

    def get_session(self) -> AuthorizedSession|None:
        """
        Authorized requests session for talking to the feeds, connecting if required.
        None if a connection can't be made.
        """
        if not self.connected:
            self.connect()
        if not self.connected:
            return None
        if self.__session is None:
            self.__session = AuthorizedSession(self.__creds)
        return self.__session

gdata = __GDataAccess()
