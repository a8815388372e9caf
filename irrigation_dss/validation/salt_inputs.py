"""Validator for leaching requirement inputs."""

from irrigation_dss.validation.errors import ValidationError

MAX_SOIL_EC = 50.0
MAX_WATER_EC = 25.0
MAX_CROP_THRESHOLD_EC = 25.0
# FAO-29 LF = ECw / (5 x ECt - ECw) is undefined once ECw reaches 5 x ECt
SALINITY_RATIO_LIMIT = 5.0


class LeachingInputValidator:
    """Checks EC inputs before a leaching requirement is calculated.

    Range checks run first; the water/crop salinity check only runs when all
    values are in range.
    """

    def validate(
        self, soil_ec: float, water_ec: float, crop_threshold_ec: float
    ) -> list[ValidationError]:
        """Validate EC values (dS/m).

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not 0 <= soil_ec <= MAX_SOIL_EC:
            errors.append(
                ValidationError(message="Soil EC must be between 0 and 50 dS/m", field="soil_ec")
            )
        if not 0 <= water_ec <= MAX_WATER_EC:
            errors.append(
                ValidationError(message="Water EC must be between 0 and 25 dS/m", field="water_ec")
            )
        if not 0 <= crop_threshold_ec <= MAX_CROP_THRESHOLD_EC:
            errors.append(
                ValidationError(
                    message="Crop threshold EC must be between 0 and 25 dS/m",
                    field="crop_threshold_ec",
                )
            )
        if errors:
            return errors

        if water_ec >= SALINITY_RATIO_LIMIT * crop_threshold_ec:
            errors.append(
                ValidationError(
                    message="Water EC too high for this crop - consider crop change or water treatment",
                    field="water_ec",
                )
            )

        return errors
