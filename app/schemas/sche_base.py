from typing import Optional, TypeVar, Generic

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ResponseSchemaBase(BaseModel):
    __abstract__ = True

    success: bool = True
    message: str = ''

    def custom_response(self, success: bool, message: str):
        self.success = success
        self.message = message
        return self

    def success_response(self):
        self.success = True
        self.message = 'Success'
        return self


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = ''
    data: Optional[T] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def custom_response(self, success: bool, message: str, data: T):
        self.success = success
        self.message = message
        self.data = data
        return self

    def success_response(self, data: T):
        self.success = True
        self.message = 'Success'
        self.data = data
        return self
