import requests
from typing import Optional, Dict, Any

class ProteinSearchClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.http = session or requests.Session()
        self.headers = {"Accept": "application/json"}

    def search(self, q: str = "", *, type: Optional[str]=None, sort: Optional[str]=None,
               external: bool=False, limit: Optional[int]=None, timeout: int=30) -> Dict[str,Any]:
        params: Dict[str, Any] = {"q": q}
        if type: params["type"] = type
        if sort: params["sort"] = sort
        if external: params["external"] = "1"
        if limit is not None: params["limit"] = str(limit)
        r = self.http.get(f"{self.base_url}/search", params=params, headers=self.headers, timeout=timeout)
        r.raise_for_status(); return r.json()

    def ready(self, timeout: int=10) -> Dict[str,Any]:
        r = self.http.get(f"{self.base_url}/readyz", headers=self.headers, timeout=timeout)
        r.raise_for_status(); return r.json()
