#!/usr/bin/env python3
"""List the models available to the configured backend."""

import os
import sys

import google.generativeai as genai
from dotenv import load_dotenv

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), ".."))

from code_agent.config import load_config, load_environment, get_configured_model_backend
from code_agent.llm_client import create_client, ModelQueryError


def list_gemini_models():
    load_dotenv()
    api_key = os.getenv("GOOGLE_API_KEY")
    if not api_key:
        print("Error: GOOGLE_API_KEY not found.")
        return

    genai.configure(api_key=api_key)
    print("--- Available Gemini Models ---")
    for m in genai.list_models():
        # Only models that support the 'generateContent' method
        if 'generateContent' in m.supported_generation_methods:
            print(f"- {m.name}")

def list_ollama_models(config):
    client = create_client(config)
    try:
        models = client.list_models()
    except ModelQueryError as e:
        print(f"Error: {e}")
        return

    print(f"--- Models on {client.host} ---")
    for name in models:
        print(f"- {name}")


if __name__ == "__main__":
    config = load_environment(load_config())
    if get_configured_model_backend(config) == "gemini":
        list_gemini_models()
    else:
        list_ollama_models(config)
