# ============================
# 🛰️ Mothership Client
# ============================
import sys
from urllib.parse import quote

import requests
from node_config import NODE_ID, MOTHERSHIP_URL, PORT, TOPIC


def register(topic=TOPIC, node_id=NODE_ID, port=PORT, mothership_url=MOTHERSHIP_URL):
    """
    🚪 Tell the mothership we own ``topic``. It figures out our host itself.

    Returns:
        bool: True if the mothership took it.
    """
    print(f"[{node_id}] Registering topic '{topic}' with mothership...")
    try:
        res = requests.post(f"{mothership_url}/register", json={
            "topic_name": topic,
            "node_id": node_id,
            "node_port": port,
        }, timeout=5)
    except requests.exceptions.ConnectionError:
        print(f"[{node_id}] ❌ Mothership unreachable. Is it running at {mothership_url}?")
        return False

    if res.status_code == 200:
        print(f"[{node_id}] ✅ Registered '{topic}' PORT 🔌 {port}")
        return True
    print(f"[{node_id}] 💔 Registration refused: {res.status_code} - {res.text}")
    return False


def resolve(topic, mothership_url=MOTHERSHIP_URL):
    """
    🔍 Ask the mothership who owns ``topic``.

    Returns:
        dict | None: node_address, node_id and node_topic, or None if nobody owns it.

    Raises:
        requests.HTTPError: The mothership is having a bad day (5xx).
    """
    res = requests.get(f"{mothership_url}/topics/{quote(topic, safe='')}", timeout=5)
    if res.status_code == 400:
        print(f"👻 Nobody owns '{topic}'")
        return None
    res.raise_for_status()
    return res.json()


if __name__ == "__main__":
    if len(sys.argv) > 1:
        print(resolve(sys.argv[1]))
    else:
        register()
