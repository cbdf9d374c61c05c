"""Text embeddings with Amazon Bedrock (Titan Text Embeddings)."""

import asyncio
import json
import logging
import time
from typing import Any, Dict, List, Optional

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionError as BotoConnectionError,
    HTTPClientError,
    NoCredentialsError,
)

from ..aws.client_manager import AWSClientManager
from ..errors import MappingError, ProviderRejected, ProviderUnavailable
from ..utils.logging import get_logger, log_with_context
from .base import EmbeddingProvider


logger = get_logger("BedrockEmbeddingProvider")

PROVIDER_NAME = "bedrock"


class BedrockEmbeddingProvider(EmbeddingProvider):
    """
    Generates embeddings by invoking a Titan embedding model on Bedrock Runtime.

    invoke_model is a blocking boto3 call; it runs in a worker thread so
    concurrent searches do not serialize on the event loop.
    """

    def __init__(
        self,
        aws_client: AWSClientManager,
        model_id: str,
        dimensions: Optional[int] = None
    ):
        """
        Initialize the Bedrock embedding provider.

        Args:
            aws_client: AWS Client Manager instance
            model_id: Bedrock embedding model ID (e.g. "amazon.titan-embed-text-v2:0")
            dimensions: Output vector size; None omits it from the request
                (required for Titan v1, which has a fixed size)
        """
        self.aws_client = aws_client
        self.model_id = model_id
        self.dimensions = dimensions

    def _build_request_body(self, text: str) -> Dict[str, Any]:
        body: Dict[str, Any] = {"inputText": text}
        if self.dimensions is not None:
            body["dimensions"] = self.dimensions
            body["normalize"] = True
        return body

    async def generate_embedding(self, text: str) -> List[float]:
        body = json.dumps(self._build_request_body(text))

        try:
            bedrock_client = self.aws_client.get_bedrock_runtime_client()
        except RuntimeError as e:
            raise ProviderUnavailable(
                f"Bedrock Runtime client unavailable: {str(e)}",
                provider=PROVIDER_NAME
            ) from e

        try:
            start_time = time.time()
            response = await asyncio.to_thread(
                bedrock_client.invoke_model,
                modelId=self.model_id,
                body=body,
                contentType="application/json",
                accept="application/json"
            )
            payload = json.loads(response["body"].read())
            execution_time_ms = (time.time() - start_time) * 1000

        except (BotoConnectionError, HTTPClientError) as e:
            log_with_context(
                logger,
                logging.ERROR,
                "Bedrock Runtime unreachable",
                context={"model_id": self.model_id, "error": str(e)}
            )
            raise ProviderUnavailable(
                f"Embedding request failed: {str(e)}",
                provider=PROVIDER_NAME
            ) from e

        except NoCredentialsError as e:
            logger.error("No AWS credentials found for Bedrock Runtime", exc_info=True)
            raise ProviderRejected(
                "Embedding request rejected: no AWS credentials",
                provider=PROVIDER_NAME,
                error_code="NoCredentials"
            ) from e

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            error_message = e.response.get("Error", {}).get("Message", str(e))

            log_with_context(
                logger,
                logging.ERROR,
                "Bedrock API error",
                context={"model_id": self.model_id, "error_message": error_message},
                error_code=error_code
            )
            raise ProviderRejected(
                f"Embedding request rejected: {error_message}",
                provider=PROVIDER_NAME,
                error_code=error_code
            ) from e

        except BotoCoreError as e:
            # Credential resolution failures: expired SSO token, partial or unretrievable credentials
            error_code = type(e).__name__
            log_with_context(
                logger,
                logging.ERROR,
                "Bedrock request could not be signed",
                context={"model_id": self.model_id, "error": str(e)},
                error_code=error_code
            )
            raise ProviderRejected(
                f"Embedding request rejected: {str(e)}",
                provider=PROVIDER_NAME,
                error_code=error_code
            ) from e

        except (KeyError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            raise MappingError(
                f"Embedding response body is unreadable: {str(e)}",
                provider=PROVIDER_NAME
            ) from e

        embedding = self._parse_embedding(payload)

        log_with_context(
            logger,
            logging.DEBUG,
            "Embedding generated",
            context={"model_id": self.model_id, "dimensions": len(embedding)},
            execution_time_ms=execution_time_ms
        )

        return embedding

    def _parse_embedding(self, payload: Any) -> List[float]:
        embedding = payload.get("embedding") if isinstance(payload, dict) else None

        if not isinstance(embedding, list) or not embedding:
            raise MappingError(
                "Embedding response has no 'embedding' vector",
                provider=PROVIDER_NAME
            )

        if not all(
            isinstance(value, (int, float)) and not isinstance(value, bool)
            for value in embedding
        ):
            raise MappingError(
                "Embedding vector contains non-numeric values",
                provider=PROVIDER_NAME
            )

        return [float(value) for value in embedding]
