# sdk/product_client.py
import requests
import httpx
from typing import Optional, Dict, Any

API_KEY_HEADER = "x-api-key"


class ProductApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _unwrap(r) -> Any:
    """Decode a requests/httpx response, raising ProductApiError on non-2xx."""
    if r.status_code >= 400:
        try:
            message = r.json().get("error", r.text)
        except ValueError:
            message = r.text
        raise ProductApiError(r.status_code, message)
    return r.json()


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        # anything with requests.Session's get/post/put/delete works here (tests pass a TestClient)
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        if api_key:
            self.session.headers.update({API_KEY_HEADER: api_key})

    def welcome(self) -> str:
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        if r.status_code >= 400:
            raise ProductApiError(r.status_code, r.text)
        return r.text

    @staticmethod
    def _list_params(category: Optional[str], search: Optional[str],
                     page: Optional[int], limit: Optional[int]) -> Dict[str, Any]:
        params = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return params

    # Products
    def list_products(self, category: Optional[str] = None, search: Optional[str] = None,
                      page: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        params = self._list_params(category, search, page, limit)
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        return _unwrap(r)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        return _unwrap(r)

    def create_product(self, name: str, description: str, price: float, category: str,
                       in_stock: bool = True) -> Dict[str, Any]:
        r = self.session.post(f"{self.base_url}/api/products", json={
            "name": name, "description": description, "price": price,
            "category": category, "inStock": in_stock,
        }, timeout=self.timeout)
        return _unwrap(r)

    def update_product(self, product_id: str, name: str, description: str, price: float,
                       category: str, in_stock: bool) -> Dict[str, Any]:
        r = self.session.put(f"{self.base_url}/api/products/{product_id}", json={
            "name": name, "description": description, "price": price,
            "category": category, "inStock": in_stock,
        }, timeout=self.timeout)
        return _unwrap(r)

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        return _unwrap(r)

    def stats(self) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}/api/products/stats", timeout=self.timeout)
        return _unwrap(r)

    # Async listing (example)
    async def list_products_async(self, category: Optional[str] = None, search: Optional[str] = None,
                                  page: Optional[int] = None, limit: Optional[int] = None,
                                  transport: Optional[httpx.AsyncBaseTransport] = None) -> Dict[str, Any]:
        headers = {API_KEY_HEADER: self.api_key} if self.api_key else {}
        params = self._list_params(category, search, page, limit)
        async with httpx.AsyncClient(timeout=self.timeout, transport=transport) as client:
            r = await client.get(f"{self.base_url}/api/products", params=params, headers=headers)
            return _unwrap(r)
