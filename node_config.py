# =====================
# 🧠 Node Configuration
# =====================
import uuid

# Your node's unique identity (stay weird)
NODE_ID = f"node-{uuid.uuid4().hex[:6]}"

# Port this node tells the mothership to send people to
PORT = 5001

# The topic this node claims
TOPIC = "telemetry"

# Mothership address (where the directory lives)
MOTHERSHIP_URL = "http://localhost:8000"
