""" configuration of orthomps tensor """
import orthomps.backend.backend_np as backend  # pylint: disable=unused-import
default_dtype = 'float64'
