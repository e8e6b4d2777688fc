from unittest import mock

from core import aws_client


def test_each_client_gets_its_own_session():
    sessions = []

    def new_session():
        session = mock.MagicMock()
        sessions.append(session)
        return session

    with mock.patch("core.aws_client.boto3.session.Session", side_effect=new_session), \
            mock.patch("core.aws_client.boto3.client") as default_client:
        aws_client.get_lambda_client("eu-west-1")
        aws_client.get_lambda_client("us-east-1")
        aws_client.get_s3_client()
        aws_client.get_codepipeline_client()

    default_client.assert_not_called()
    assert len(sessions) == 4
    assert sessions[0].client.call_args.args == ("lambda",)
    assert sessions[0].client.call_args.kwargs["region_name"] == "eu-west-1"
    assert sessions[1].client.call_args.kwargs["region_name"] == "us-east-1"
    assert sessions[2].client.call_args.args == ("s3",)
    assert sessions[3].client.call_args.args == ("codepipeline",)


def test_lambda_client_does_not_retry_by_default():
    with mock.patch("core.aws_client.boto3.session.Session") as session_cls:
        aws_client.get_lambda_client("eu-west-1")

    config = session_cls.return_value.client.call_args.kwargs["config"]
    assert config.retries == {"max_attempts": 0}
