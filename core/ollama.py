import atexit
import shutil
import subprocess
import time
from typing import List

import ollama
import requests

from poliseek.config import DEFAULT_OLLAMA_URL

STARTUP_WAIT_SECONDS = 10
STARTUP_POLL_INTERVAL = 0.5

server_process = None

def stop_server():
    global server_process
    if server_process is None:
        return
    print("\nStopping Ollama...")
    server_process.terminate()
    try:
        server_process.wait(timeout=5)
    except subprocess.TimeoutExpired:
        print("Ollama did not stop, killing it...")
        server_process.kill()
    server_process = None

def is_ollama_installed() -> bool:
    return shutil.which("ollama") is not None

def is_ollama_running(ollama_url: str = DEFAULT_OLLAMA_URL) -> bool:
    try:
        response = requests.get(f"{ollama_url.rstrip('/')}/api/tags", timeout=5)
    except requests.RequestException:
        return False
    return response.status_code == 200

def start_server(ollama_url: str = DEFAULT_OLLAMA_URL) -> bool:
    """Launch `ollama serve` and wait until the API answers."""
    global server_process
    try:
        server_process = subprocess.Popen(
            ["ollama", "serve"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL
        )
    except OSError as e:
        print(f"Could not launch Ollama: {e}")
        return False

    deadline = time.monotonic() + STARTUP_WAIT_SECONDS
    while time.monotonic() < deadline:
        if is_ollama_running(ollama_url):
            return True
        time.sleep(STARTUP_POLL_INTERVAL)
    return False

def check_ollama(ollama_url: str = DEFAULT_OLLAMA_URL) -> bool:
    """Make sure an Ollama API is reachable, starting a local server if needed."""
    if is_ollama_running(ollama_url):
        return True

    if not is_ollama_installed():
        print(f"No Ollama API at {ollama_url} and Ollama is not installed. Visit https://ollama.com/")
        return False

    print("Starting Ollama...")
    if start_server(ollama_url):
        print("Ollama started.")
        return True

    print(f"Ollama did not come up at {ollama_url}.")
    return False

def list_installed_models(ollama_url: str = DEFAULT_OLLAMA_URL) -> List[str]:
    client = ollama.Client(host=ollama_url)
    return [model.model for model in client.list().models]

# Stop a server we launched ourselves
atexit.register(stop_server)
