import openai
import time
from typing import Dict, Any, Optional
from utils.logger import AgentLogger


DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"


class ContentGenerationError(Exception):
    """Exception raised when the generation service call fails"""
    pass


class GenerationClient:
    """Client for any OpenAI-compatible chat completion endpoint (OpenRouter by default)"""

    def __init__(self, api_key: str, config: Optional[Dict[str, Any]] = None,
                 openai_client: Any = None):
        if not api_key and openai_client is None:
            raise ValueError("OPENROUTER_API_KEY is required for content generation")

        settings = (config or {}).get("generation", {})
        self.base_url = settings.get("base_url", DEFAULT_BASE_URL)
        self.temperature = settings.get("temperature", 0.7)
        self.default_max_tokens = settings.get("max_tokens", 4000)

        self.client = openai_client or openai.OpenAI(
            base_url=self.base_url,
            api_key=api_key,
            timeout=settings.get("request_timeout", 120),
            max_retries=0,
        )
        self.logger = AgentLogger("generation_client")

    def generate_content(self, prompt: str, model: str = DEFAULT_MODEL,
                         response_schema: Optional[Dict[str, Any]] = None,
                         schema_name: str = "response",
                         max_tokens: Optional[int] = None,
                         task_type: str = "unknown",
                         reasoning: Optional[Dict[str, Any]] = None) -> str:
        """Send a single prompt and return the text of the first choice.

        When `response_schema` is given the request asks for JSON conforming to
        it. The caller still validates the returned text. `reasoning` is sent
        as OpenRouter's `reasoning` body field, e.g. {"max_tokens": 0} to keep
        thinking tokens out of a small output budget.
        """
        request: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens or self.default_max_tokens,
            "temperature": self.temperature,
        }
        if response_schema is not None:
            request["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": response_schema, "strict": False},
            }
        if reasoning is not None:
            request["extra_body"] = {"reasoning": reasoning}

        self.logger.log_info("generation_request_starting", {
            "task_type": task_type,
            "model": model,
            "structured": response_schema is not None,
            "max_tokens": request["max_tokens"],
            "prompt_chars": len(prompt),
        })

        start_time = time.time()

        try:
            response = self.client.chat.completions.create(**request)
        except openai.APIError as e:
            self.logger.log_api_call("generation", model, False, time.time() - start_time)
            self.logger.log_error("generation_api_error", str(e), {"task_type": task_type})
            raise ContentGenerationError(f"Generation API error: {e}") from e
        except Exception as e:
            self.logger.log_api_call("generation", model, False, time.time() - start_time)
            self.logger.log_error("generation_unexpected_error", str(e), {"task_type": task_type})
            raise ContentGenerationError(f"Generation unexpected error: {e}") from e

        self.logger.log_api_call("generation", model, True, time.time() - start_time)

        usage = getattr(response, "usage", None)
        if usage is not None:
            self.logger.log_info("generation_usage", {
                "task_type": task_type,
                "model": model,
                "input_tokens": getattr(usage, "prompt_tokens", None),
                "output_tokens": getattr(usage, "completion_tokens", None),
            })

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


class ModelRouter:
    """Selects the model for each generation task from settings"""

    def __init__(self, client: GenerationClient, config: Optional[Dict[str, Any]] = None):
        self.client = client
        self.logger = AgentLogger("model_router")

        settings = (config or {}).get("generation", {})
        self.default_model = settings.get("model", DEFAULT_MODEL)
        self.task_models: Dict[str, str] = dict(settings.get("task_models", {}))
        self.task_reasoning: Dict[str, Dict[str, Any]] = dict(settings.get("task_reasoning", {}))

    def model_for(self, task_type: str) -> str:
        return self.task_models.get(task_type, self.default_model)

    def generate_content(self, task_type: str, prompt: str,
                         response_schema: Optional[Dict[str, Any]] = None,
                         max_tokens: Optional[int] = None) -> str:
        """Route a task's prompt to its configured model"""
        model = self.model_for(task_type)

        self.logger.log_info("routing_request", {"task_type": task_type, "selected_model": model})

        return self.client.generate_content(
            prompt,
            model=model,
            response_schema=response_schema,
            schema_name=task_type,
            max_tokens=max_tokens,
            reasoning=self.task_reasoning.get(task_type),
            task_type=task_type,
        )
