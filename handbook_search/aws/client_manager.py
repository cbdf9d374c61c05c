"""AWS session and Bedrock Runtime client management."""

import logging
from typing import Optional

import boto3
from botocore.exceptions import ClientError, NoCredentialsError, ProfileNotFound

from ..utils.logging import get_logger, log_with_context


logger = get_logger("AWSClientManager")


class AWSClientManager:
    """
    Owns the boto3 session used to reach Amazon Bedrock.

    Uses a named AWS profile when one is configured (local stdio runs),
    otherwise the default credential chain (environment, IAM role).
    The bedrock-runtime client is created lazily and reused; boto3
    clients are thread-safe, so embedding calls running in worker threads
    can share it.
    """

    def __init__(self, profile: Optional[str], region: str):
        """
        Initialize AWS Client Manager.

        Args:
            profile: AWS profile name (None to use default credential chain)
            region: AWS region hosting the Bedrock embedding model
        """
        self.profile = profile
        self.region = region
        self._session: Optional[boto3.Session] = None
        self._bedrock_runtime_client = None

        self._initialize_session()

    def _initialize_session(self) -> None:
        try:
            if self.profile:
                logger.info(f"Initializing AWS session with profile: {self.profile}")
                self._session = boto3.Session(
                    profile_name=self.profile,
                    region_name=self.region
                )
            else:
                logger.info("Initializing AWS session with default credential chain")
                self._session = boto3.Session(region_name=self.region)

        except ProfileNotFound as e:
            logger.error(
                f"AWS profile '{self.profile}' not found",
                exc_info=True,
                extra={"context": {"profile": self.profile}}
            )
            raise ValueError(
                f"AWS profile '{self.profile}' not found. "
                f"Check your ~/.aws/credentials file."
            ) from e
        except Exception as e:
            logger.error(
                "Failed to initialize AWS session",
                exc_info=True,
                extra={"context": {"error": str(e)}}
            )
            raise RuntimeError(
                f"Failed to initialize AWS session: {str(e)}"
            ) from e

    def get_bedrock_runtime_client(self):
        """
        Get boto3 client for Bedrock Runtime (invoke_model).

        Returns:
            boto3 client for the bedrock-runtime service

        Raises:
            RuntimeError: If client creation fails
        """
        if self._bedrock_runtime_client is None:
            try:
                logger.info("Creating Bedrock Runtime client")
                self._bedrock_runtime_client = self._session.client(
                    "bedrock-runtime",
                    region_name=self.region
                )
                logger.info("Bedrock Runtime client created successfully")
            except Exception as e:
                logger.error(
                    "Failed to create Bedrock Runtime client",
                    exc_info=True,
                    extra={"context": {"region": self.region, "error": str(e)}}
                )
                raise RuntimeError(
                    f"Failed to create Bedrock Runtime client: {str(e)}"
                ) from e

        return self._bedrock_runtime_client

    def verify_credentials(self) -> bool:
        """
        Verify AWS credentials by calling STS GetCallerIdentity.

        Returns:
            True if credentials are valid

        Raises:
            NoCredentialsError: If no credentials are found
            ClientError: If credentials are invalid or expired
            RuntimeError: If verification fails for other reasons
        """
        try:
            logger.info("Verifying AWS credentials")
            sts_client = self._session.client("sts")
            response = sts_client.get_caller_identity()

            log_with_context(
                logger,
                logging.INFO,
                "AWS credentials verified successfully",
                context={
                    "account_id": response.get("Account"),
                    "arn": response.get("Arn")
                }
            )

            return True

        except NoCredentialsError:
            logger.error("No AWS credentials found", exc_info=True)
            raise
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            error_message = e.response.get("Error", {}).get("Message", str(e))

            log_with_context(
                logger,
                logging.ERROR,
                "AWS credential verification failed",
                context={"error_message": error_message},
                error_code=error_code
            )

            if error_code in ["InvalidClientTokenId", "SignatureDoesNotMatch", "ExpiredToken"]:
                message = f"AWS credentials are invalid or expired. Original error: {error_message}"
            else:
                message = f"Failed to verify credentials: {error_message}"

            raise ClientError(
                {"Error": {"Code": error_code, "Message": message}},
                "GetCallerIdentity"
            ) from e
        except Exception as e:
            logger.error(
                "Unexpected error during credential verification",
                exc_info=True,
                extra={"context": {"error": str(e)}}
            )
            raise RuntimeError(
                f"Unexpected error during credential verification: {str(e)}"
            ) from e
