"""
Form validation.
Re-checks bound form values against their pydantic schema and reports field errors.
"""
from typing import Set
from pydantic import BaseModel, ValidationError
from identity_web.models.dto.identity_dto import FieldError


class Validator:
    """Validates bound request forms."""
    
    def validate(self, request: BaseModel) -> Set[FieldError]:
        """
        Validate a bound request.
        
        Args:
            request: A form built without validation (e.g. via model_construct)
            
        Returns:
            Set of field errors; empty when the request is valid
        """
        model = type(request)
        values = {name: getattr(request, name, None) for name in model.model_fields}
        
        try:
            model.model_validate(values)
        except ValidationError as e:
            return {
                FieldError(
                    field=".".join(str(part) for part in error['loc']) or "__all__",
                    message=error['msg']
                )
                for error in e.errors()
            }
        
        return set()
