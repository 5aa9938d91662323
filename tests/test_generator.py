"""
Тесты для генератора TypeScript клиентов
"""

import copy

import pytest

from openapi_ts_client.generator import ApiClientGenerator
from openapi_ts_client.internal.errors import (
    DanglingReferenceError,
    MissingBaseUrlError,
    MissingOperationIdError,
    MissingTagsError,
    UnsupportedSchemaError,
)
from openapi_ts_client.internal.types.policy import GenerationPolicy

BASE_SPEC = {
    "openapi": "3.0.0",
    "info": {"title": "Pet Store", "version": "1.0.0"},
    "servers": [{"url": "https://api.example.com"}],
    "tags": [{"name": "pets", "description": "Everything about pets"}],
    "paths": {},
    "components": {"schemas": {}},
}


def make_spec(paths=None, schemas=None, **extra):
    spec = copy.deepcopy(BASE_SPEC)
    spec["paths"] = paths or {}
    spec["components"]["schemas"] = schemas or {}
    spec.update(extra)
    return spec


def generate_files(spec, policy=None):
    project = ApiClientGenerator(spec, policy=policy).generate()
    return {f.file_name: str(f) for f in project.files}


def json_body(schema, required=True):
    return {"required": required, "content": {"application/json": {"schema": schema}}}


def json_response(schema):
    return {"description": "OK", "content": {"application/json": {"schema": schema}}}


class TestClientModules:
    """Тесты модулей клиента"""

    def test_get_pet_scenario(self):
        """Тест сценария /pets/{id} -> getPet"""
        spec = make_spec(
            paths={
                "/pets/{id}": {
                    "get": {
                        "tags": ["pets"],
                        "operationId": "getPet",
                        "parameters": [
                            {"name": "id", "in": "path", "schema": {"type": "string"}}
                        ],
                        "responses": {
                            "200": json_response(
                                {
                                    "type": "object",
                                    "properties": {
                                        "name": {"type": "string"},
                                        "age": {"type": "integer"},
                                    },
                                    "required": ["name"],
                                }
                            )
                        },
                    }
                }
            }
        )

        client = generate_files(spec)["pets.ts"]

        assert (
            "getPet(id: string): Promise<{ name: string; age?: number; }>" in client
        )
        assert 'method: "get",' in client
        assert "url: `https://api.example.com/pets/${id}`," in client
        assert "return response.data;" in client

    def test_module_header(self):
        """Тест импортов и класса клиента"""
        spec = make_spec(
            paths={
                "/pets": {
                    "get": {
                        "tags": ["pets"],
                        "operationId": "listPets",
                        "responses": {"200": json_response({"type": "string"})},
                    }
                }
            }
        )

        client = generate_files(spec)["pets.ts"]

        assert client.startswith(
            'import axios from "axios";\nimport * as Models from "./models";\n'
        )
        assert " * pets\n" in client
        assert " * Everything about pets\n" in client
        assert "export class PetsApiClient {" in client
        assert "public static async listPets(): Promise<string> {" in client

    def test_parameter_order(self):
        """Тест порядка: body, обязательные, опциональные"""
        spec = make_spec(
            paths={
                "/pets": {
                    "post": {
                        "tags": ["pets"],
                        "operationId": "createPet",
                        "parameters": [
                            {
                                "name": "dryRun",
                                "in": "query",
                                "schema": {"type": "boolean"},
                            },
                            {
                                "name": "owner",
                                "in": "query",
                                "required": True,
                                "schema": {"type": "string"},
                            },
                        ],
                        "requestBody": json_body({"$ref": "#/components/schemas/Pet"}),
                        "responses": {"201": json_response({"$ref": "#/components/schemas/Pet"})},
                    }
                }
            },
            schemas={"Pet": {"type": "object", "properties": {"name": {"type": "string"}}}},
        )

        client = generate_files(spec)["pets.ts"]

        assert (
            "createPet(body: Models.Pet, owner: string, dryRun?: boolean): "
            "Promise<Models.Pet>" in client
        )
        assert "data: body," in client
        assert "dryRun," in client
        assert "owner," in client

    def test_optional_body_goes_last(self):
        spec = make_spec(
            paths={
                "/pets/{id}": {
                    "patch": {
                        "tags": ["pets"],
                        "operationId": "updatePet",
                        "parameters": [
                            {"name": "id", "in": "path", "schema": {"type": "integer"}}
                        ],
                        "requestBody": json_body({"type": "string"}, required=False),
                        "responses": {"204": {"description": "No content"}},
                    }
                }
            }
        )

        client = generate_files(spec)["pets.ts"]

        assert "updatePet(id: number, body?: string): Promise<void>" in client

    def test_body_required_by_presence(self):
        """Тест политики: наличие тела делает его обязательным"""
        spec = make_spec(
            paths={
                "/pets": {
                    "put": {
                        "tags": ["pets"],
                        "operationId": "replacePets",
                        "parameters": [
                            {"name": "force", "in": "query", "schema": {"type": "boolean"}}
                        ],
                        "requestBody": {
                            "content": {"application/json": {"schema": {"type": "string"}}}
                        },
                        "responses": {},
                    }
                }
            }
        )

        lenient = generate_files(spec)["pets.ts"]
        strict = generate_files(
            spec, policy=GenerationPolicy(body_required_by_presence=True)
        )["pets.ts"]

        assert "replacePets(body?: string, force?: boolean)" in lenient
        assert "replacePets(body: string, force?: boolean)" in strict

    def test_response_union(self):
        """Тест объединения типов ответов"""
        spec = make_spec(
            paths={
                "/pets/{id}": {
                    "delete": {
                        "tags": ["pets"],
                        "operationId": "deletePet",
                        "parameters": [
                            {"name": "id", "in": "path", "schema": {"type": "string"}}
                        ],
                        "responses": {
                            "200": json_response({"$ref": "#/components/schemas/Pet"}),
                            "404": json_response({"$ref": "#/components/schemas/Error"}),
                            "default": json_response({"$ref": "#/components/schemas/Error"}),
                            "204": {"description": "Deleted"},
                        },
                    }
                }
            },
            schemas={
                "Pet": {"type": "object", "properties": {}},
                "Error": {"type": "object", "properties": {"message": {"type": "string"}}},
            },
        )

        client = generate_files(spec)["pets.ts"]

        assert "Promise<Models.Pet | Models.Error>" in client

    def test_response_reference(self):
        spec = make_spec(
            paths={
                "/pets": {
                    "get": {
                        "tags": ["pets"],
                        "operationId": "listPets",
                        "responses": {"200": {"$ref": "#/components/responses/PetList"}},
                    }
                }
            },
            schemas={"Pet": {"type": "object", "properties": {}}},
        )
        spec["components"]["responses"] = {
            "PetList": json_response(
                {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}
            )
        }

        client = generate_files(spec)["pets.ts"]

        assert "listPets(): Promise<Array<Models.Pet>>" in client

    def test_query_and_header_parameters(self):
        spec = make_spec(
            paths={
                "/pets": {
                    "get": {
                        "tags": ["pets"],
                        "operationId": "listPets",
                        "parameters": [
                            {"$ref": "#/components/parameters/Limit"},
                            {
                                "name": "X-Request-ID",
                                "in": "header",
                                "schema": {"type": "string"},
                            },
                            {"name": "session", "in": "cookie", "schema": {"type": "string"}},
                        ],
                        "responses": {},
                    }
                }
            }
        )
        spec["components"]["parameters"] = {
            "Limit": {
                "name": "limit",
                "in": "query",
                "required": True,
                "schema": {"type": "integer"},
            }
        }

        client = generate_files(spec)["pets.ts"]

        assert (
            "listPets(limit: number, xRequestID?: string, session?: string)" in client
        )
        assert "params: {\n" in client
        assert "limit,\n" in client
        assert "headers: {\n" in client
        assert '"X-Request-ID": xRequestID,' in client
        assert "session," not in client

    def test_empty_query_object(self):
        spec = make_spec(
            paths={
                "/pets": {
                    "get": {"tags": ["pets"], "operationId": "listPets", "responses": {}}
                }
            }
        )

        client = generate_files(spec)["pets.ts"]

        assert "params: {}," in client
        assert "headers" not in client
        assert "data:" not in client

    def test_parameter_names_are_unique(self):
        """Тест одинаковых имен параметров в разных расположениях"""
        spec = make_spec(
            paths={
                "/pets/{id}": {
                    "post": {
                        "tags": ["pets"],
                        "operationId": "op",
                        "parameters": [
                            {"name": "id", "in": "path", "schema": {"type": "string"}},
                            {"name": "id", "in": "query", "schema": {"type": "integer"}},
                            {"name": "body", "in": "query", "schema": {"type": "string"}},
                        ],
                        "requestBody": json_body({"type": "string"}),
                        "responses": {},
                    }
                }
            }
        )

        client = generate_files(spec)["pets.ts"]

        assert (
            "op(body: string, id: string, idQuery?: number, bodyQuery?: string)"
            in client
        )
        assert "url: `https://api.example.com/pets/${id}`," in client
        assert '"id": idQuery,' in client
        assert '"body": bodyQuery,' in client
        assert "data: body," in client

    def test_path_parameter_named_body(self):
        spec = make_spec(
            paths={
                "/things/{body}": {
                    "put": {
                        "tags": ["pets"],
                        "operationId": "putThing",
                        "parameters": [
                            {"name": "body", "in": "path", "schema": {"type": "string"}},
                            {"name": "xId", "in": "query", "schema": {"type": "string"}},
                            {"name": "X-Id", "in": "header", "schema": {"type": "string"}},
                        ],
                        "requestBody": json_body({"type": "integer"}),
                        "responses": {},
                    }
                }
            }
        )

        client = generate_files(spec)["pets.ts"]

        assert (
            "putThing(body: number, bodyPath: string, xId?: string, xIdHeader?: string)"
            in client
        )
        assert "url: `https://api.example.com/things/${bodyPath}`," in client
        assert "xId,\n" in client
        assert '"X-Id": xIdHeader,' in client

    def test_extension_keys(self):
        """Тест расширений x-... в paths и responses"""
        spec = make_spec(
            paths={
                "x-internal": True,
                "/pets": {
                    "get": {
                        "tags": ["pets"],
                        "operationId": "listPets",
                        "responses": {
                            "200": json_response({"type": "string"}),
                            "x-foo": "bar",
                        },
                    }
                },
            }
        )

        files = generate_files(spec)

        assert sorted(files) == ["README.md", "models.ts", "pets.ts"]
        assert "listPets(): Promise<string>" in files["pets.ts"]

    def test_file_names_are_unique(self):
        """Тест тегов с одинаковым именем файла и тега models"""
        spec = make_spec(
            paths={
                "/one": {
                    "get": {"tags": ["pet store"], "operationId": "one", "responses": {}}
                },
                "/two": {
                    "get": {"tags": ["pet_store"], "operationId": "two", "responses": {}}
                },
                "/three": {
                    "get": {"tags": ["models"], "operationId": "three", "responses": {}}
                },
            }
        )

        files = generate_files(spec)

        assert sorted(files) == [
            "README.md",
            "models.ts",
            "models_2.ts",
            "pet_store.ts",
            "pet_store_2.ts",
        ]
        assert "one(" in files["pet_store.ts"]
        assert "two(" in files["pet_store_2.ts"]
        assert "three(" in files["models_2.ts"]
        assert "three(" not in files["models.ts"]

    def test_jsdoc_escaping(self):
        spec = make_spec(
            paths={
                "/pets": {
                    "get": {
                        "tags": ["pets"],
                        "operationId": "listPets",
                        "summary": "List */ pets",
                        "description": "First line\nSecond line",
                        "responses": {},
                    }
                }
            }
        )

        client = generate_files(spec)["pets.ts"]

        assert " * List *\\/ pets\n" in client
        assert " * First line\n" in client
        assert " * Second line\n" in client
        assert "*/ pets" not in client

    def test_path_level_parameters(self):
        """Тест параметров уровня пути и их перекрытия"""
        spec = make_spec(
            paths={
                "/owners/{ownerId}/pets": {
                    "parameters": [
                        {"name": "ownerId", "in": "path", "schema": {"type": "string"}},
                        {"name": "page", "in": "query", "schema": {"type": "string"}},
                    ],
                    "get": {
                        "tags": ["pets"],
                        "operationId": "listOwnerPets",
                        "parameters": [
                            {"name": "page", "in": "query", "schema": {"type": "integer"}}
                        ],
                        "responses": {},
                    },
                }
            }
        )

        client = generate_files(spec)["pets.ts"]

        assert "listOwnerPets(ownerId: string, page?: number)" in client
        assert "url: `https://api.example.com/owners/${ownerId}/pets`," in client

    def test_jsdoc(self):
        spec = make_spec(
            paths={
                "/pets": {
                    "get": {
                        "tags": ["pets"],
                        "operationId": "listPets",
                        "summary": "List pets",
                        "description": "Returns all pets",
                        "deprecated": True,
                        "responses": {},
                    }
                }
            }
        )

        client = generate_files(spec)["pets.ts"]

        assert " * List pets\n" in client
        assert " * Returns all pets\n" in client
        assert " * @deprecated\n" in client

    def test_multiple_tags(self):
        """Тест модуля на каждый тег"""
        spec = make_spec(
            paths={
                "/pets": {
                    "get": {
                        "tags": ["pets", "store"],
                        "operationId": "listPets",
                        "responses": {},
                    }
                },
                "/orders": {
                    "get": {"tags": ["store"], "operationId": "listOrders", "responses": {}}
                },
            }
        )

        files = generate_files(spec)

        assert "listPets" in files["pets.ts"]
        assert "listPets" in files["store.ts"]
        assert "listOrders" in files["store.ts"]
        assert "export class StoreApiClient {" in files["store.ts"]
        # Тег без описания в tags
        assert " * store\n" in files["store.ts"]

    def test_methods_follow_verb_order(self):
        spec = make_spec(
            paths={
                "/pets": {
                    "post": {"tags": ["pets"], "operationId": "createPet", "responses": {}},
                    "get": {"tags": ["pets"], "operationId": "listPets", "responses": {}},
                }
            }
        )

        client = generate_files(spec)["pets.ts"]

        assert client.index("listPets(") < client.index("createPet(")


class TestModels:
    """Тесты models.ts"""

    def test_pet_scenario(self):
        """Тест схемы Pet с enum свойством"""
        spec = make_spec(
            schemas={
                "Pet": {
                    "type": "object",
                    "properties": {
                        "status": {"type": "string", "enum": ["available", "sold"]}
                    },
                    "required": ["status"],
                }
            }
        )

        models = generate_files(spec)["models.ts"]

        assert 'export interface Pet { status: "available" | "sold"; }' in models

    def test_quoted_property_names(self):
        spec = make_spec(
            schemas={
                "Hdr": {
                    "type": "object",
                    "properties": {
                        "content-type": {"type": "string"},
                        "@id": {"type": "string"},
                    },
                }
            }
        )

        models = generate_files(spec)["models.ts"]

        assert 'export interface Hdr { "content-type"?: string; "@id"?: string; }' in models

    def test_non_object_schemas_are_skipped(self):
        spec = make_spec(
            schemas={
                "Status": {"type": "string", "enum": ["a", "b"]},
                "Tags": {"type": "array", "items": {"type": "string"}},
            }
        )

        models = generate_files(spec)["models.ts"]

        assert "Status" not in models
        assert "Tags" not in models

    def test_type_aliases(self):
        spec = make_spec(
            schemas={
                "Status": {"type": "string", "enum": ["a", "b"]},
                "Tags": {"type": "array", "items": {"$ref": "#/components/schemas/Tag"}},
                "Tag": {"type": "object", "properties": {"label": {"type": "string"}}},
            }
        )

        models = generate_files(spec, policy=GenerationPolicy(type_aliases=True))[
            "models.ts"
        ]

        assert 'export type Status = "a" | "b";' in models
        assert "export type Tags = Array<Tag>;" in models
        assert "export interface Tag { label?: string; }" in models

    def test_references_inside_models(self):
        """Тест ссылок между моделями без префикса Models."""
        spec = make_spec(
            schemas={
                "Owner": {
                    "type": "object",
                    "properties": {"pets": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}},
                },
                "Pet": {
                    "type": "object",
                    "properties": {"owner": {"$ref": "#/components/schemas/Owner"}},
                },
            }
        )

        models = generate_files(spec)["models.ts"]

        assert "export interface Owner { pets?: Array<Pet>; }" in models
        assert "export interface Pet { owner?: Owner; }" in models
        assert "Models." not in models

    def test_alias_to_object_is_expanded(self):
        spec = make_spec(
            schemas={
                "Pet": {"type": "object", "properties": {"name": {"type": "string"}}},
                "Animal": {"$ref": "#/components/schemas/Pet"},
            }
        )

        models = generate_files(spec)["models.ts"]

        assert "export interface Animal { name?: string; }" in models

    def test_multiline_models(self):
        spec = make_spec(
            schemas={
                "Pet": {
                    "type": "object",
                    "properties": {"name": {"type": "string"}},
                    "required": ["name"],
                }
            }
        )

        models = generate_files(spec, policy=GenerationPolicy(multiline_models=True))[
            "models.ts"
        ]

        assert "export interface Pet {\n  name: string;\n}" in models

    def test_models_keep_declared_order(self):
        spec = make_spec(
            schemas={
                "Zebra": {"type": "object", "properties": {}},
                "Ant": {"type": "object", "properties": {}},
            }
        )

        models = generate_files(spec)["models.ts"]

        assert models.index("Zebra") < models.index("Ant")


class TestErrors:
    """Тесты фатальных ошибок"""

    def test_missing_base_url(self):
        spec = make_spec()
        del spec["servers"]

        with pytest.raises(MissingBaseUrlError):
            ApiClientGenerator(spec).generate()

    def test_missing_operation_id(self):
        spec = make_spec(
            paths={"/pets": {"get": {"tags": ["pets"], "responses": {}}}}
        )

        with pytest.raises(MissingOperationIdError) as exc_info:
            ApiClientGenerator(spec).generate()

        assert exc_info.value.location == "/pets -> get"

    def test_missing_tags(self):
        spec = make_spec(paths={"/pets": {"get": {"operationId": "g", "responses": {}}}})

        with pytest.raises(MissingTagsError):
            ApiClientGenerator(spec).generate()

    def test_missing_tags_lenient(self):
        spec = make_spec(paths={"/pets": {"get": {"operationId": "g", "responses": {}}}})

        files = generate_files(spec, policy=GenerationPolicy(strict_tags=False))

        assert sorted(files) == ["README.md", "models.ts"]

    def test_unsupported_type(self):
        spec = make_spec(
            schemas={"Blob": {"type": "object", "properties": {"data": {"type": "file"}}}}
        )

        with pytest.raises(UnsupportedSchemaError):
            ApiClientGenerator(spec).generate()

    def test_dangling_reference(self):
        spec = make_spec(
            paths={
                "/pets": {
                    "get": {
                        "tags": ["pets"],
                        "operationId": "listPets",
                        "responses": {"200": json_response({"$ref": "#/components/schemas/Nope"})},
                    }
                }
            }
        )

        with pytest.raises(DanglingReferenceError):
            ApiClientGenerator(spec).generate()
