# core/constants.py
from typing import Tuple


class Constants:
    # The name under which every region publishes the layer
    LAYER_NAME = "sample-layer"

    # Runtimes declared on each published layer version
    COMPATIBLE_RUNTIMES: Tuple[str, ...] = ("nodejs12.x", "nodejs14.x")

    # Description attached to each published layer version
    LAYER_DESCRIPTION = "Sample layer distributed to multiple region by CodePipeline"

    # SPDX identifier of the layer license
    LICENSE_INFO = "MIT"

    # The action on the layer version permission statement
    PERMISSION_ACTION = "lambda:GetLayerVersion"

    # Reused on every grant so repeated grants overwrite instead of accumulate
    PERMISSION_STATEMENT_ID = "layer-policy"

    # Shown in the pipeline UI on failure; details only go to the logs
    FAILURE_MESSAGE = "Layer distribution failed. Please check CloudWatch logs"

    # CodePipeline failure category
    FAILURE_TYPE = "JobFailed"
