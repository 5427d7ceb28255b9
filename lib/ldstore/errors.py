import sys
import traceback


class StoreError(Exception):
    """
    Base class for store errors.

    :ivar type: a dotted error type, e.g. 'ldstore.NotFound'.
    :ivar details: extra details, usually the request IRI.
    :ivar code: the HTTP status code when the store answered.
    :ivar cause: the underlying exception, if any.
    """

    def __init__(self, message, type_, details=None, code=None, cause=None):
        Exception.__init__(self, message)
        self.type = type_
        self.details = details
        self.code = code
        self.cause = cause
        self.causeTrace = traceback.extract_tb(*sys.exc_info()[2:])

    def __str__(self):
        rval = str(self.args)
        rval += '\nType: ' + self.type
        if self.code:
            rval += '\nCode: ' + str(self.code)
        if self.details:
            rval += '\nDetails: ' + repr(self.details)
        if self.cause:
            rval += '\nCause: ' + str(self.cause)
            rval += ''.join(traceback.format_list(self.causeTrace))
        return rval
