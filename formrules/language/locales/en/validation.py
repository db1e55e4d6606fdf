"""English validation messages."""

messages = {
    "alpha": "The {field} field requires only alphabetic characters.",
    "alphaNumber": "The {field} field requires only alphabetic and numeric characters.",
    "array": "The {field} field requires an array.",
    "base64": "The {field} field requires a valid base64 string.",
    "between": "The {field} field must be between {0} and {1}.",
    "bool": "The {field} field requires a boolean.",
    "datetime": "The {field} field does not match the required datetime format.",
    "dim": "The {field} field requires an image with the exact dimensions of {0} in width and {1} in height.",
    "email": "The {field} field requires a valid email address.",
    "equals": "The {field} field must be equals the {0} field.",
    "ext": "The {field} field requires a file with an accepted extension: {args}.",
    "float": "The {field} field requires a float.",
    "greater": "The {field} field must be greater than {0}.",
    "greaterOrEqual": "The {field} field must be greater than or equal to {0}.",
    "hex": "The {field} field requires a valid hexadecimal string.",
    "hexColor": "The {field} field requires a valid hexadecimal color.",
    "image": "The {field} field requires an image.",
    "in": "The {field} field does not have an allowed value.",
    "int": "The {field} field requires an integer.",
    "ip": "The {field} field requires a valid IP address.",
    "isset": "The {field} field must be sent.",
    "json": "The {field} field requires a valid JSON string.",
    "latin": "The {field} field requires only latin characters.",
    "length": "The {field} field requires exactly {0} characters in length.",
    "less": "The {field} field must be less than {0}.",
    "lessOrEqual": "The {field} field must be less than or equal to {0}.",
    "maxDim": "The {field} field requires an image that does not exceed the maximum dimensions of {0} in width and {1} in height.",
    "maxLength": "The {field} field requires {0} or less characters in length.",
    "maxSize": "The {field} field requires a file that does not exceed the maximum size of {0} kilobytes.",
    "md5": "The {field} field requires a valid MD5 hash.",
    "mimes": "The {field} field requires a file with an accepted MIME type: {args}.",
    "minDim": "The {field} field requires an image having the minimum dimensions of {0} in width and {1} in height.",
    "minLength": "The {field} field requires {0} or more characters in length.",
    "notBetween": "The {field} field can not be between {0} and {1}.",
    "notEquals": "The {field} field can not be equals the {0} field.",
    "notIn": "The {field} field has a disallowed value.",
    "notRegex": "The {field} field matches a invalid pattern.",
    "number": "The {field} field requires only numeric characters.",
    "object": "The {field} field requires an object.",
    "optional": "The {field} field is optional.",
    "regex": "The {field} field does not matches the required pattern.",
    "required": "The {field} field is required.",
    "specialChar": "The {field} field requires special characters.",
    "string": "The {field} field requires a string.",
    "timezone": "The {field} field requires a valid timezone.",
    "uploaded": "The {field} field requires a file to be uploaded.",
    "url": "The {field} field requires a valid URL address.",
    "uuid": "The {field} field requires a valid UUID.",
}
