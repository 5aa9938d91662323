import json
from typing import Dict, Any, List, Optional, Set, Tuple

from ..errors import MissingOperationIdError
from ..types.document import Info, TagInfo
from ..types.models import (
    Project,
    CodeBlock,
    TsClass,
    TsDeclaration,
    TsMethod,
    TsParameter,
)
from ..types.policy import GenerationPolicy
from ..types.renderer import MODELS_NAMESPACE, TypeRenderer, schema_kind
from ..types.schema_resolver import Registry
from ..utils.naming import file_slug, identifier, model_name, template_url
from .grouping import HTTP_VERBS, OperationEntry, group_operations
from .readme import build_readme
from .templates import templates

JSON_MEDIA_TYPE = "application/json"
BODY_PARAMETER = "body"

# Имена файлов (в нижнем регистре), занятые моделями и README
RESERVED_FILE_NAMES = ("models", "readme")


class ClientGenerator:
    """Генератор TypeScript клиента из OpenAPI"""

    def __init__(
        self,
        openapi_dict: Dict[str, Any],
        registry: Registry,
        base_url: str,
        policy: Optional[GenerationPolicy] = None,
        source_url: Optional[str] = None,
    ):
        self.openapi_dict = openapi_dict
        self.registry = registry
        self.base_url = base_url
        self.policy = policy or GenerationPolicy()
        self.source_url = source_url
        self.project = Project(name="api")

        # В клиентах ссылки идут через Models., внутри models.ts - без префикса
        self.client_types = TypeRenderer(registry, MODELS_NAMESPACE)
        self.model_types = TypeRenderer(registry, "")

    def generate(self) -> Project:
        """Основная генерация: всё рендерится в память, запись отдельно"""
        self._generate_clients()
        self._generate_models()
        self._generate_readme()
        return self.project

    def _generate_clients(self):
        """Один модуль клиента на каждый тег"""
        table = group_operations(
            self.openapi_dict.get("paths", {}), strict=self.policy.strict_tags
        )
        tags = self._tag_infos()
        used_names = set(RESERVED_FILE_NAMES)

        for tag, group in table.items():
            tag_info = tags.get(tag) or TagInfo(name=tag)

            client_file = self.project.add_file(
                self._client_file_name(tag, used_names)
            )
            client_file.imports.extend(templates.client_imports)

            description = [tag_info.name]
            if tag_info.description:
                description.append(tag_info.description)

            client_class = client_file.add_class(
                TsClass(name=f"{model_name(tag)}ApiClient", description=description)
            )

            for verb in HTTP_VERBS:
                for entry in group.get(verb, []):
                    client_class.add_method(self._generate_method(verb, entry))

    @staticmethod
    def _client_file_name(tag: str, used_names: Set[str]) -> str:
        """
        Имя модуля клиента <tag>.ts, уникальное в пределах проекта.

        Разные теги могут дать одно имя файла ("pet store" и "pet_store"),
        а тег "models" совпадает с файлом моделей. В таком случае к имени
        добавляется номер: pet_store_2.ts, models_2.ts.
        """
        slug = file_slug(tag)
        candidate = slug
        index = 2
        while candidate.lower() in used_names:
            candidate = f"{slug}_{index}"
            index += 1

        used_names.add(candidate.lower())
        return f"{candidate}.ts"

    def _tag_infos(self) -> Dict[str, TagInfo]:
        result = {}
        for tag in self.openapi_dict.get("tags") or []:
            tag_info = TagInfo.model_validate(tag)
            result[tag_info.name] = tag_info
        return result

    def _generate_method(self, verb: str, entry: OperationEntry) -> TsMethod:
        """Статический метод клиента для одной операции"""
        operation = entry.operation
        operation_id = operation.get("operationId")
        if not operation_id:
            raise MissingOperationIdError(entry.path, verb)

        parameters = []
        taken: Set[str] = set()
        body = operation.get("requestBody")
        if body is not None:
            parameters.append(self._create_body_parameter(body))
            taken.add(BODY_PARAMETER)

        params = self._collect_parameters(entry)
        variables = self._parameter_variables(params, taken)

        query_names = []
        header_names = []
        path_variables = {}
        for param, variable in zip(params, variables):
            parameters.append(self._create_parameter(param, variable))
            location = param.get("in")
            if location == "query":
                query_names.append((param["name"], variable))
            elif location == "header":
                header_names.append((param["name"], variable))
            elif location == "path":
                path_variables[param["name"]] = variable

        response = self._get_return_type(operation.get("responses") or {})

        options = ""
        if body is not None:
            options += f"\tdata: {BODY_PARAMETER},\n"
        options += self._object_option("params", query_names, always=True)
        options += self._object_option("headers", header_names)

        code = templates.request.format(
            response=response,
            verb=verb,
            url=template_url(self.base_url, entry.path, path_variables),
            options=options,
        )

        return TsMethod(
            name=operation_id,
            parameters=parameters,
            response=response,
            summary=operation.get("summary"),
            description=operation.get("description"),
            deprecated=bool(operation.get("deprecated", False)),
            code=CodeBlock(code=code),
        )

    @staticmethod
    def _parameter_variables(
        params: List[Dict[str, Any]], taken: Set[str]
    ) -> List[str]:
        """
        Уникальные имена переменных для параметров метода.

        Параметры пути выбирают имя первыми. При совпадении к имени
        добавляется расположение параметра (id в query -> idQuery), а если
        и оно занято, то номер.
        """
        variables = [""] * len(params)
        order = sorted(range(len(params)), key=lambda i: params[i].get("in") != "path")

        for i in order:
            param = params[i]
            variable = identifier(param["name"])
            if variable in taken:
                variable += str(param.get("in") or "").capitalize()

            candidate = variable
            index = 2
            while candidate in taken:
                candidate = f"{variable}{index}"
                index += 1

            taken.add(candidate)
            variables[i] = candidate

        return variables

    @staticmethod
    def _object_option(
        key: str, names: List[Tuple[str, str]], always: bool = False
    ) -> str:
        """Опция axios вида params: { limit, "X-Id": xId }"""
        if not names:
            return f"\t{key}: {{}},\n" if always else ""

        entries = []
        for name, variable in names:
            if variable == name:
                entries.append(f"\t\t{name},")
            else:
                entries.append(f"\t\t{json.dumps(name, ensure_ascii=False)}: {variable},")

        return (
            templates.object_option.format(name=key, entries="\n".join(entries)) + "\n"
        )

    def _collect_parameters(self, entry: OperationEntry) -> List[Dict[str, Any]]:
        """Параметры пути и операции; параметр операции перекрывает параметр пути"""
        path_item = self.openapi_dict.get("paths", {}).get(entry.path)
        if not isinstance(path_item, dict):
            path_item = {}

        merged: Dict[Tuple[str, str], Dict[str, Any]] = {}
        for raw in list(path_item.get("parameters") or []) + list(
            entry.operation.get("parameters") or []
        ):
            param = self.registry.resolve(raw)
            key = (param.get("name"), param.get("in"))
            # Перекрытие сохраняет позицию параметра пути
            merged[key] = param

        return list(merged.values())

    def _create_parameter(self, param: Dict[str, Any], variable: str) -> TsParameter:
        """Параметр метода; параметры пути всегда обязательные"""
        required = param.get("in") == "path" or bool(param.get("required", False))

        schema = param.get("schema")
        if schema is None:
            schema = self._media_schema(param.get("content"))

        return TsParameter(
            name=variable,
            var_type=self._render_or_unknown(schema),
            required=required,
        )

    def _create_body_parameter(self, request_body: Any) -> TsParameter:
        body = self.registry.resolve(request_body)
        if self.policy.body_required_by_presence:
            required = True
        else:
            required = bool(body.get("required", False))

        schema = self._media_schema(body.get("content"))
        return TsParameter(
            name=BODY_PARAMETER,
            var_type=self._render_or_unknown(schema),
            required=required,
        )

    @staticmethod
    def _media_schema(content: Optional[Dict[str, Any]]) -> Any:
        """Схема из content: application/json, иначе первый тип со схемой"""
        if not isinstance(content, dict):
            return None

        media = content.get(JSON_MEDIA_TYPE)
        if isinstance(media, dict) and "schema" in media:
            return media["schema"]

        for media in content.values():
            if isinstance(media, dict) and "schema" in media:
                return media["schema"]

        return None

    def _render_or_unknown(self, schema: Any) -> str:
        if schema is None:
            return "unknown"
        return self.client_types.render(schema)

    def _get_return_type(self, responses: Any) -> str:
        """Объединение типов всех ответов"""
        types: List[str] = []

        for code, response in self.registry.resolve(responses).items():
            # Расширения x-... в разделе responses
            if str(code).startswith("x-"):
                continue

            response = self.registry.resolve(response)
            if not isinstance(response, dict):
                continue

            schema = self._media_schema(response.get("content"))
            if schema is None:
                continue

            rendered = self.client_types.render(schema)
            if rendered not in types:
                types.append(rendered)

        return " | ".join(types) if types else "void"

    def _generate_models(self):
        """models.ts: интерфейс на каждую объектную схему из components"""
        models_file = self.project.add_file("models.ts")
        models_file.add_code_block(CodeBlock(code=templates.models_header, order=1))

        for name, schema in self.registry.schemas.items():
            node = self.registry.resolve_chain(schema)

            if isinstance(node, dict) and schema_kind(node) == "object":
                # Тело объявления всегда раскрывается, даже если сама схема - ссылка
                body = self.model_types.render_object(
                    node, multiline=self.policy.multiline_models
                )
                models_file.add_declaration(
                    TsDeclaration(name=model_name(name), body=body)
                )
            elif self.policy.type_aliases:
                models_file.add_declaration(
                    TsDeclaration(
                        name=model_name(name),
                        body=self.model_types.render(schema),
                        keyword="type",
                    )
                )

    def _generate_readme(self):
        info = Info.model_validate(self.openapi_dict.get("info") or {})
        self.project.add_file("README.md").add_code_block(
            CodeBlock(code=build_readme(info).rstrip("\n"))
        )
