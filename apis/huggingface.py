import requests
from typing import Any, Dict


def post_inference(model: str, payload: Dict[str, Any], token: str,
                   base_url: str = "https://api-inference.huggingface.co/models",
                   timeout: float = 120.0) -> requests.Response:
    """
    Hugging Face Inference API にモデル推論リクエストを送る

    Args:
        model (str): モデルID (e.g. "facebook/musicgen-small")
        payload (Dict[str, Any]): JSONボディ
        token (str): Hugging Face APIトークン
        base_url (str): 推論APIのベースURL
        timeout (float): タイムアウト（秒）

    Returns:
        requests.Response: ステータスは呼び出し側で確認する
    """
    url = f"{base_url.rstrip('/')}/{model}"
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }
    return requests.post(url, headers=headers, json=payload, timeout=timeout)
