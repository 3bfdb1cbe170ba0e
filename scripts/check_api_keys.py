# scripts/check_api_keys.py
"""Script to validate the LLM key and the three enrichment tokens"""

import asyncio
import aiohttp
import json
import os
from dotenv import load_dotenv

load_dotenv()

ENRICHMENT_TOKENS = [
    ("C++ Architecture and Design", "CPP_ARCHITECTURE_TOKEN"),
    ("C++ Performance and Concurrency", "CPP_PERFORMANCE_TOKEN"),
    ("Machine Learning Resources", "ML_RESOURCE_TOKEN"),
]

async def check_openai_api():
    """Test the LLM credential by listing models"""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        return False, "API key not found"

    base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")
    model = os.getenv("LLM_MODEL", "gpt-4o")

    try:
        async with aiohttp.ClientSession() as session:
            headers = {"Authorization": f"Bearer {api_key}"}
            async with session.get(f"{base_url}/models", headers=headers) as response:
                if response.status == 200:
                    data = await response.json()
                    models = [m.get("id") for m in data.get("data", [])]
                    if model in models:
                        return True, f"OK - {model} available"
                    return True, f"OK - {model} not listed"
                elif response.status == 401:
                    return False, "Invalid API key"
                elif response.status == 429:
                    return False, "Rate limit exceeded"
                else:
                    error_text = await response.text()
                    return False, f"HTTP {response.status}: {error_text[:100]}"
    except Exception as e:
        return False, str(e)

async def check_enrichment_token(env_name: str):
    """Send a minimal prompt to the enrichment endpoint with one token"""
    token = os.getenv(env_name)
    if not token:
        return False, "Token not found"

    endpoint = os.getenv("ENRICHMENT_ENDPOINT", "https://api.langbase.com/beta/generate")
    payload = {"messages": [{"role": "user", "content": "ping"}]}
    headers = {"Content-Type": "application/json", "Authorization": f"Bearer {token}"}

    try:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=60)) as session:
            async with session.post(endpoint, json=payload, headers=headers) as response:
                if response.status != 200:
                    return False, f"HTTP {response.status}"
                data = json.loads(await response.text())
                if "completion" not in data:
                    return False, "No completion field in response"
                return True, "OK"
    except Exception as e:
        return False, str(e)

async def main():
    """Check all upstream credentials"""
    print("🔍 Checking API keys...\n")

    checks = [("OpenAI API", check_openai_api())]
    checks += [(label, check_enrichment_token(env_name)) for label, env_name in ENRICHMENT_TOKENS]

    results = await asyncio.gather(*[check[1] for check in checks])

    print("📊 API Status Check Results:\n")
    for (name, _), (success, message) in zip(checks, results):
        status = "✅" if success else "❌"
        print(f"{status} {name}: {message}")

    all_apis_good = all(result[0] for result in results)
    print(f"\n{'🎉 All APIs are working!' if all_apis_good else '⚠️  Some APIs need attention'}")

    if not all_apis_good:
        print("\n💡 Troubleshooting tips:")
        print("- Check your .env file for correct keys")
        print("- A missing enrichment token only drops that section from reports")
        print("- A missing OPENAI_API_KEY makes every analysis request fail with HTTP 500")

if __name__ == "__main__":
    asyncio.run(main())
