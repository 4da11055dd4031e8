# =============================
# 🧪 Multi-Node Mothership Test
# =============================
# Run against a live mothership: python mothership.py mothership.toml
import requests

MOTHERSHIP_URL = "http://localhost:8000"
NODE_PORTS = [5001, 5002, 5003]  # Simulate 3 nodes
NODE_IDS = [f"node-{port}" for port in NODE_PORTS]
TOPICS = ["telemetry", "metrics", "alerts"]

def register_all_nodes():
    for node_id, port, topic in zip(NODE_IDS, NODE_PORTS, TOPICS):
        print(f"🚪 Registering {node_id} for {topic}")
        res = requests.post(f"{MOTHERSHIP_URL}/register", json={
            "topic_name": topic,
            "node_id": node_id,
            "node_port": port
        })
        print(res.status_code)

def resolve_all():
    for topic in TOPICS:
        res = requests.get(f"{MOTHERSHIP_URL}/topics/{topic}")
        print(f"🔍 {topic}: {res.status_code} {res.json()}")

def takeover():
    print("🔄 node-5003 grabs telemetry")
    requests.post(f"{MOTHERSHIP_URL}/register", json={
        "topic_name": "telemetry",
        "node_id": "node-5003",
        "node_port": 5003
    })
    res = requests.get(f"{MOTHERSHIP_URL}/topics/telemetry")
    print(res.status_code, res.json())

def resolve_ghost():
    res = requests.get(f"{MOTHERSHIP_URL}/topics/never-registered")
    print(f"👻 never-registered: {res.status_code} {res.json()}")

def verify_status():
    print("📊 Mothership Status:")
    res = requests.get(f"{MOTHERSHIP_URL}/status")
    print(res.status_code, res.json())

if __name__ == "__main__":
    register_all_nodes()
    resolve_all()
    takeover()
    resolve_ghost()
    verify_status()
