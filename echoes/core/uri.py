"""URI resolver — построение token URI.

Формат: {base_uri}{lowercase echo address}/{token_id}
Конкатенация строгая: слэш в конце base_uri — ответственность администратора.
"""

from echoes.core.domain.address import is_address
from echoes.core.errors import InvalidAddress


def token_uri(base_uri: str, echo_address: str, token_id: int) -> str:
    """
    Token URI для токена коллекции.

    Args:
        base_uri: Префикс реестра (читается live, не кешируется)
        echo_address: Адрес коллекции в любом регистре
        token_id: Номер токена (>= 0)

    Returns:
        base_uri + lowercase(echo_address) + "/" + token_id
    """
    if not is_address(echo_address):
        raise InvalidAddress(f"not an address: {echo_address!r}")
    if token_id < 0:
        raise ValueError(f"token_id must be non-negative, got {token_id}")
    return f"{base_uri}{echo_address.lower()}/{token_id}"
