"""
分类索引与选中集合单元测试
"""

from sheetgen.catalog import CategoryIndex, is_selectable
from sheetgen.models import CategoryNode, LeafNode, ViewItem
from sheetgen.selection import SelectionSet

from conftest import make_view


class TestCategoryIndex:
    """分类索引测试"""

    def test_insert_groups_by_label(self):
        """测试同类型归入同一节点"""
        index = CategoryIndex()
        index.insert("Level 1", "Floor Plan")
        index.insert("Level 2", "Floor Plan")
        index.insert("North", "Building Elevation")

        nodes = index.all_categories()
        assert len(nodes) == 2
        assert len(index) == 2
        assert nodes[0].text == "Floor Plans"
        assert nodes[0].leaf_names == ["Level 1", "Level 2"]
        assert nodes[1].text == "Elevations [Building Elevation]"
        assert nodes[1].leaf_names == ["North"]

    def test_insertion_order(self):
        """测试类别按首次出现顺序排列"""
        index = CategoryIndex()
        for name, label in [("S1", "Section"), ("L1", "Floor Plan"), ("S2", "Section")]:
            index.insert(name, label)
        assert [n.tag for n in index.all_categories()] == ["Section", "Floor Plan"]

    def test_insert_no_dedup(self):
        """测试重复插入产生两个叶节点"""
        index = CategoryIndex()
        index.insert("Level 1", "Floor Plan")
        index.insert("Level 1", "Floor Plan")
        assert index.all_categories()[0].leaf_names == ["Level 1", "Level 1"]

    def test_is_selectable(self):
        """测试过滤规则"""
        excluded = ["Schedule", "Drawing Sheet"]
        assert is_selectable(make_view("A"), excluded)
        assert not is_selectable(make_view("T", is_template=True), excluded)
        assert not is_selectable(make_view("S", type_label="Schedule"), excluded)
        assert not is_selectable(make_view("D", type_label="Drawing Sheet"), excluded)

    def test_populate(self, sample_views: list[ViewItem]):
        """测试填充时过滤"""
        index = CategoryIndex()
        accepted = index.populate(sample_views)
        assert [v.name for v in accepted] == ["A", "B", "C"]
        assert [n.text for n in index.all_categories()] == [
            "Floor Plans",
            "Elevations [Building Elevation]",
            "Sections",
        ]

    def test_check(self):
        """测试勾选"""
        index = CategoryIndex()
        index.insert("A", "Floor Plan")
        index.insert("B", "Section")
        assert index.check("B") == 1
        assert index.check("missing") == 0
        assert index.checked_names() == ["B"]
        index.check_all()
        assert index.checked_names() == ["A", "B"]


class TestSelectionSet:
    """选中集合测试"""

    def test_resolve(self, sample_views: list[ViewItem]):
        """测试按勾选解析，顺序为文档顺序"""
        index = CategoryIndex()
        index.populate(sample_views)
        index.check("C")
        index.check("A")

        selection = SelectionSet.resolve(index.all_categories(), sample_views)
        assert selection.names == ["A", "C"]

    def test_unknown_leaf_omitted(self, sample_views: list[ViewItem]):
        """测试勾选的名称找不到时忽略"""
        node = CategoryNode(
            tag="Floor Plan",
            text="Floor Plans",
            children=[LeafNode(text="A", checked=True), LeafNode(text="Ghost", checked=True)],
        )
        selection = SelectionSet.resolve([node], sample_views)
        assert selection.names == ["A"]
        assert "Ghost" not in selection

    def test_leaf_with_children_skipped(self, sample_views: list[ViewItem]):
        """测试带子节点的叶节点被跳过"""
        node = CategoryNode(
            tag="Floor Plan",
            text="Floor Plans",
            children=[LeafNode(text="A", checked=True, children=[LeafNode(text="x")])],
        )
        assert SelectionSet.resolve([node], sample_views).is_empty()

    def test_unique_by_name(self):
        """测试同名视图只加入一次"""
        views = [make_view("A"), make_view("A", view_type="Section")]
        selection = SelectionSet.from_names(["A"], views)
        assert len(selection) == 1
        assert next(iter(selection)).view_type == "FloorPlan"

    def test_empty(self, sample_views: list[ViewItem]):
        """测试未勾选时为空"""
        index = CategoryIndex()
        index.populate(sample_views)
        assert SelectionSet.resolve(index.all_categories(), sample_views).is_empty()
