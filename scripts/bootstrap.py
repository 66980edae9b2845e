#!/usr/bin/env python3
"""
Setup helper for the Local Code Agent.
Installs the package, writes a starter .env and checks the Ollama server.
"""

import os
import sys
import subprocess
import shutil
from pathlib import Path

ENV_TEMPLATE = """# Model backend: ollama (default) or gemini
MODEL_BACKEND=ollama
OLLAMA_HOST=http://localhost:11434
OLLAMA_MODEL=deepseek-coder:6.7b
# Only needed with MODEL_BACKEND=gemini
GOOGLE_API_KEY=
"""

def check_python_version():
    """Check if Python version is 3.9 or higher"""
    if sys.version_info < (3, 9):
        print("❌ Error: Python 3.9 or higher is required")
        print(f"   Current version: {sys.version}")
        return False
    print(f"✅ Python {sys.version.split()[0]} detected")
    return True

def install_package():
    """Install the agent in editable mode"""
    print("\n📦 Installing local-code-agent...")
    try:
        subprocess.check_call([sys.executable, "-m", "pip", "install", "-e", "."])
        print("✅ Package installed successfully")
        return True
    except subprocess.CalledProcessError:
        print("❌ Failed to install the package")
        return False

def setup_env_file():
    """Write a starter .env unless one exists"""
    env_file = Path(".env")
    if env_file.exists():
        print("✅ .env file already exists")
        return

    env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
    print("✅ Created .env file")
    print("📝 Edit .env to change the model or add a Google API key")

def check_ollama():
    """Check that the ollama binary and server are available"""
    if shutil.which("ollama") is None:
        print("⚠️  ollama not found on PATH. Install it from https://ollama.com")
        return False

    result = subprocess.run(["ollama", "list"], capture_output=True, text=True)
    if result.returncode != 0:
        print("⚠️  Ollama is installed but not running. Start it with: ollama serve")
        return False

    model = os.getenv("OLLAMA_MODEL", "deepseek-coder:6.7b")
    if model not in result.stdout:
        print(f"⚠️  Model {model} not pulled yet. Run: ollama pull {model}")
        return False

    print(f"✅ Ollama is running with {model}")
    return True

def main():
    """Main setup function"""
    print("🤖 Local Code Agent Setup")
    print("=" * 30)

    if not check_python_version():
        sys.exit(1)

    if not install_package():
        sys.exit(1)

    setup_env_file()
    check_ollama()

    print("\n🎉 Setup completed!")
    print("\n📖 Quick start:")
    print("   code-agent --mode scan --path ./my-project")
    print("   code-agent --mode chat --path ./my-project")
    print("   code-agent --help")

if __name__ == "__main__":
    main()
