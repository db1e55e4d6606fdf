"""Mensagens de validação em português do Brasil."""

messages = {
    "alpha": "O campo {field} requer apenas caracteres alfabéticos.",
    "alphaNumber": "O campo {field} requer apenas caracteres alfabéticos e numéricos.",
    "array": "O campo {field} requer um array.",
    "base64": "O campo {field} requer uma string base64 válida.",
    "between": "O campo {field} deve estar entre {0} e {1}.",
    "bool": "O campo {field} requer um booleano.",
    "datetime": "O campo {field} não corresponde ao formato de datetime requerido.",
    "dim": "O campo {field} requer uma imagem com as dimensões exatas de {0} de largura e {1} de altura.",
    "email": "O campo {field} requer um endereço de e-mail válido.",
    "equals": "O campo {field} deve ser igual ao campo {0}.",
    "ext": "O campo {field} requer um arquivo com uma extensão aceita: {args}.",
    "float": "O campo {field} requer um número de ponto flutuante.",
    "greater": "O campo {field} deve ser maior que {0}.",
    "greaterOrEqual": "O campo {field} deve ser maior ou igual a {0}.",
    "hex": "O campo {field} requer uma string hexadecimal válida.",
    "hexColor": "O campo {field} requer uma cor hexadecimal válida.",
    "image": "O campo {field} requer uma imagem.",
    "in": "O campo {field} não é um valor permitido.",
    "int": "O campo {field} requer um número inteiro.",
    "ip": "O campo {field} requer um endereço de IP válido.",
    "isset": "O campo {field} deve ser enviado.",
    "json": "O campo {field} requer uma string JSON válida.",
    "latin": "O campo {field} requer apenas caracteres latinos.",
    "length": "O campo {field} requer exatamente {0} caracteres no tamanho.",
    "less": "O campo {field} deve ser menor que {0}.",
    "lessOrEqual": "O campo {field} deve ser menor ou igual a {0}.",
    "maxDim": "O campo {field} requer uma imagem que não exceda as dimensões máximas de {0} de largura e {1} de altura.",
    "maxLength": "O campo {field} requer {0} ou menos caracteres no tamanho.",
    "maxSize": "O campo {field} requer um arquivo que não exceda o tamanho máximo de {0} kilobytes.",
    "md5": "O campo {field} requer um hash MD5 válido.",
    "mimes": "O campo {field} requer um arquivo com um tipo MIME aceito: {args}.",
    "minDim": "O campo {field} requer uma imagem com as dimensões mínimas de {0} de largura e {1} de altura.",
    "minLength": "O campo {field} requer {0} ou mais caracteres no tamanho.",
    "notBetween": "O campo {field} não pode estar entre {0} e {1}.",
    "notEquals": "O campo {field} não pode ser igual ao campo {0}.",
    "notIn": "O campo {field} é um valor não permitido.",
    "notRegex": "O campo {field} corresponde a um padrão inválido.",
    "number": "O campo {field} requer apenas caracteres numéricos.",
    "object": "O campo {field} requer um objeto.",
    "optional": "O campo {field} é opcional.",
    "regex": "O campo {field} não corresponde ao padrão requerido.",
    "required": "O campo {field} é obrigatório.",
    "specialChar": "O campo {field} requer caracteres especiais.",
    "string": "O campo {field} requer uma string.",
    "timezone": "O campo {field} requer uma timezone válida.",
    "uploaded": "O campo {field} requer que um arquivo seja enviado.",
    "url": "O campo {field} requer um endereço de URL válido.",
    "uuid": "O campo {field} requer um UUID válido.",
}
