from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ecsctl.config import Config

# Anything the SDK raises for a failed request
API_ERRORS = (ClientError, BotoCoreError)

def get_client(service: str, region: Optional[str] = None, profile: Optional[str] = None):
    """
    Build a boto3 client for `service`.

    Explicit region/profile win over the values from the environment; when
    neither is set boto3 resolves them from its usual config chain.
    """
    session = boto3.session.Session(
        profile_name=profile or Config.AWS_PROFILE,
        region_name=region or Config.AWS_REGION,
    )
    return session.client(service)
