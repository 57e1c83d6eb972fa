"""
Seal Flow proxy entry point.
"""
import os
import sys
import traceback

print("[SealFlowProxy] Starting Seal Flow proxy")

# Default to production for Railway deployment
config_name = os.getenv('FLASK_ENV', 'production')
print(f"[SealFlowProxy] Config: {config_name}")
print(f"[SealFlowProxy] PORT: {os.getenv('PORT', 'not set')}")

try:
    from app import create_app
    app = create_app(config_name)
    print(f"[SealFlowProxy] Shops: {', '.join(app.extensions['region_registry'].shops) or 'none'}")
except Exception as e:
    print(f"[SealFlowProxy] FATAL ERROR during app creation: {e}")
    traceback.print_exc()
    sys.exit(1)

if __name__ == '__main__':
    app.run(
        host='0.0.0.0',
        port=int(os.getenv('PORT', 3000)),
        debug=os.getenv('FLASK_ENV') == 'development'
    )
