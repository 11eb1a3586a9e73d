# tounsi_relay/api/__init__.py
# =============================
# API Layer — Tounsi Relay
#
#   - POST /audio  multipart upload (audio + direction) → relay result JSON
#   - GET  /health liveness probe
#   - static browser client from the configured static directory
#
# Public API:
#   create_app(settings=None, service=None) → FastAPI
