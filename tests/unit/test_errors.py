import pytest
from botocore.exceptions import (
    ClientError,
    CredentialRetrievalError,
    EndpointConnectionError,
    InvalidConfigError,
    NoCredentialsError,
    NoRegionError,
    ParamValidationError,
    ProfileNotFound,
    SSOError,
)

from aws_ec2_ssh.providers.aws.errors import (
    describe_api_error,
    describe_credentials_error,
    handle_aws_errors,
)
from aws_ec2_ssh.providers.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
)


def client_error(code: str, message: str = "boom", operation: str = "DescribeInstances"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class TestHandleAwsErrors:
    def test_no_credentials(self) -> None:
        with pytest.raises(ProviderCredentialsError, match="Unable to locate credentials"):
            with handle_aws_errors():
                raise NoCredentialsError()

    def test_unknown_profile(self) -> None:
        with pytest.raises(ProviderCredentialsError, match="missing"):
            with handle_aws_errors():
                raise ProfileNotFound(profile="missing")

    def test_no_region(self) -> None:
        with pytest.raises(ProviderAPIError) as exc_info:
            with handle_aws_errors():
                raise NoRegionError()

        assert exc_info.value.error_code == "NoRegion"
        assert "--region" in str(exc_info.value)

    def test_client_error_keeps_code_and_operation(self) -> None:
        with pytest.raises(ProviderAPIError) as exc_info:
            with handle_aws_errors():
                raise client_error("InvalidInstanceID.NotFound", "no such instance")

        assert str(exc_info.value) == "no such instance"
        assert exc_info.value.error_code == "InvalidInstanceID.NotFound"
        assert exc_info.value.operation_name == "DescribeInstances"
        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_endpoint_connection_error(self) -> None:
        with pytest.raises(ProviderConnectionError):
            with handle_aws_errors():
                raise EndpointConnectionError(endpoint_url="https://ec2.example")

    def test_credential_process_failure(self) -> None:
        with pytest.raises(ProviderCredentialsError, match="from process: boom"):
            with handle_aws_errors():
                raise CredentialRetrievalError(provider="process", error_msg="boom")

    def test_sso_error(self) -> None:
        with pytest.raises(ProviderCredentialsError):
            with handle_aws_errors():
                raise SSOError()

    @pytest.mark.parametrize(
        "error",
        [
            ParamValidationError(report="Invalid length for parameter InstanceId"),
            InvalidConfigError(error_msg="bad config value"),
        ],
    )
    def test_other_botocore_errors_become_api_errors(self, error) -> None:
        with pytest.raises(ProviderAPIError) as exc_info:
            with handle_aws_errors():
                raise error

        assert str(exc_info.value) == str(error)
        assert exc_info.value.error_code is None

    def test_other_exceptions_pass_through(self) -> None:
        with pytest.raises(KeyError):
            with handle_aws_errors():
                raise KeyError("x")


class TestDescribeCredentialsError:
    def test_expired_sso_session(self) -> None:
        error = ProviderCredentialsError(
            "Error when retrieving token from sso: Token has expired and refresh failed"
        )

        assert describe_credentials_error(error, "dev") == [
            "Your AWS SSO session has expired or is invalid.",
            "Run: aws sso login --profile dev",
        ]

    def test_missing_credentials_defaults_profile_name(self) -> None:
        error = ProviderCredentialsError("Unable to locate credentials")

        assert describe_credentials_error(error, None) == [
            "No AWS credentials found for profile 'default'.",
            "Configure credentials with: aws configure --profile default",
        ]

    def test_other_credentials_error(self) -> None:
        error = ProviderCredentialsError("The config profile (x) could not be found")

        assert describe_credentials_error(error, "x") == [
            "AWS credentials error: The config profile (x) could not be found"
        ]


class TestDescribeApiError:
    @pytest.mark.parametrize("code", ["ExpiredToken", "InvalidClientTokenId"])
    def test_expired_credentials(self, code: str) -> None:
        error = ProviderAPIError("expired", error_code=code)

        assert describe_api_error(error, "dev") == [
            "Your AWS credentials have expired or are invalid.",
            "Run: aws sso login --profile dev",
        ]

    def test_access_denied(self) -> None:
        error = ProviderAPIError("not authorized", error_code="UnauthorizedOperation")

        assert describe_api_error(error, None) == [
            "Access denied: not authorized",
            "Check your IAM permissions or AWS account. (profile: default)",
        ]

    def test_request_canceled(self) -> None:
        error = ProviderAPIError("canceled", error_code="RequestCanceled")

        assert describe_api_error(error, None) == [
            "AWS request was canceled (possible credential/config timeout)."
        ]

    def test_other_code(self) -> None:
        error = ProviderAPIError("target not connected", error_code="TargetNotConnected")

        assert describe_api_error(error, None) == [
            "AWS error (TargetNotConnected): target not connected"
        ]

    def test_no_code(self) -> None:
        assert describe_api_error(ProviderAPIError("odd"), None) == ["AWS error: odd"]
