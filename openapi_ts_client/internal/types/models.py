from typing import Optional, Literal, Dict, List

from pydantic import BaseModel


class CodeBlock(BaseModel):
    order: int = 0
    code: str = ""

    def __str__(self):
        return self.code.replace("\t", "  ")


class TsParameter(BaseModel):
    name: str
    var_type: str = "unknown"
    required: bool = True

    def __str__(self):
        return self.name + (":" if self.required else "?:") + f" {self.var_type}"


def doc_comment(lines: List[str]) -> str:
    """JSDoc блок из строк, пустые строки между абзацами"""
    body = []
    for line in lines:
        # */ внутри текста закрыл бы комментарий
        for part in str(line).replace("*/", "*\\/").split("\n"):
            body.append(f" * {part}".rstrip())
        body.append(" *")

    return "\n".join(["/**"] + body + [" */"])


class TsMethod(BaseModel):
    name: str
    parameters: List[TsParameter] = []
    response: str = "void"

    static: bool = True
    async_def: bool = True

    summary: Optional[str] = None
    description: Optional[str] = None
    deprecated: bool = False

    code: CodeBlock = CodeBlock()
    order: int = 0

    def ordered_parameters(self) -> List[TsParameter]:
        """Сначала обязательные, потом опциональные; порядок внутри групп сохраняется"""
        return sorted(self.parameters, key=lambda p: not p.required)

    def signature(self) -> str:
        return (
            f"{self.name}("
            + ", ".join(map(str, self.ordered_parameters()))
            + f"): {'Promise<' + self.response + '>' if self.async_def else self.response}"
        )

    def __str__(self) -> str:
        modifiers = "public " + ("static " if self.static else "") + (
            "async " if self.async_def else ""
        )

        docstring = self._generate_docstring()

        return (
            (docstring + "\n" if docstring else "")
            + modifiers
            + self.signature()
            + " {\n"
            + "\t"
            + str(self.code).replace("\n", "\n\t")
            + "\n}"
        ).replace("\t", "  ")

    def _generate_docstring(self) -> str:
        lines = []

        if self.summary:
            lines.append(self.summary)
        if self.description:
            lines.append(self.description)
        if self.deprecated:
            lines.append("@deprecated")

        return doc_comment(lines) if lines else ""


class TsClass(BaseModel):
    name: str
    description: List[str] = []

    methods: Dict[str, TsMethod] = {}
    exported: bool = True

    order: int = 0

    def __str__(self) -> str:
        header = (
            (doc_comment(self.description) + "\n" if self.description else "")
            + ("export " if self.exported else "")
            + f"class {self.name} {{"
        )

        body = "\n\n".join(
            str(method)
            for method in sorted(
                self.methods.values(), key=lambda m: m.order, reverse=True
            )
        )

        if not body:
            return header + "\n}"

        # Отступ для содержимого класса
        return header + "\n" + "\n".join(
            ("  " + line) if line else line for line in body.split("\n")
        ) + "\n}"

    def add_method(self, method: TsMethod) -> TsMethod:
        self.methods[method.name] = method
        return method


class TsDeclaration(BaseModel):
    """Именованное объявление типа: export interface / export type"""

    name: str
    body: str
    keyword: Literal["interface", "type"] = "interface"

    order: int = 0

    def __str__(self) -> str:
        if self.keyword == "type":
            return f"export type {self.name} = {self.body};"
        return f"export interface {self.name} {self.body}"


class CodeFile(BaseModel):
    file_name: str

    imports: List[str] = []
    classes: Dict[str, TsClass] = {}
    declarations: List[TsDeclaration] = []
    code_blocks: List[CodeBlock] = []

    def __str__(self):
        parts = [
            "\n".join(self.imports) if self.imports else "",
            "\n\n".join(
                map(
                    str,
                    sorted(
                        self.code_blocks
                        + self.declarations
                        + list(self.classes.values()),
                        key=lambda x: x.order,
                        reverse=True,
                    ),
                )
            ),
        ]
        text = "\n\n".join(filter(bool, parts))
        return text + "\n" if text else ""

    def add_class(self, cls: TsClass) -> TsClass:
        self.classes[cls.name] = cls
        return cls

    def add_declaration(self, declaration: TsDeclaration) -> TsDeclaration:
        self.declarations.append(declaration)
        return declaration

    def add_code_block(self, code_block: CodeBlock) -> "CodeFile":
        self.code_blocks.append(code_block)
        return self


class Project(BaseModel):
    name: str
    files: List[CodeFile] = []

    def add_file(self, file_name: str, **kwargs) -> CodeFile:
        code_file = CodeFile(file_name=file_name, **kwargs)
        self.files.append(code_file)
        return code_file

    def get_file(self, file_name: str) -> Optional[CodeFile]:
        for code_file in self.files:
            if code_file.file_name == file_name:
                return code_file
        return None

    def render(self) -> Dict[str, str]:
        """Текст всех файлов проекта, в памяти"""
        return {code_file.file_name: str(code_file) for code_file in self.files}
