"""
Sample catalogue loaded by `meigen-admin seed`.

Shape: category name → subcategory name → author name → list of quotes.
Each quote is (text, text_ja, background); background may be None.
"""

SEED_CATALOGUE = {
    "偉人": {
        "哲学者": {
            "ソクラテス": [
                (
                    "The only true wisdom is in knowing you know nothing.",
                    "無知の知こそが真の知恵である。",
                    "自分の無知を自覚することの重要性を説いた言葉。",
                ),
                (
                    "An unexamined life is not worth living.",
                    "吟味されない生は生きるに値しない。",
                    "アテナイの裁判で語られたとされる。",
                ),
            ],
            "プラトン": [
                (
                    "Wise men speak because they have something to say; "
                    "fools because they have to say something.",
                    "賢者は言うべきことがあるから話す。愚者は何か言わねばならぬから話す。",
                    None,
                ),
            ],
        },
        "科学者": {
            "アインシュタイン": [
                (
                    "Imagination is more important than knowledge.",
                    "想像力は知識よりも重要である。",
                    "想像力こそが新しい発見の源泉であるという考え。",
                ),
                (
                    "Life is like riding a bicycle. To keep your balance, you must keep moving.",
                    "人生は自転車に乗るようなものだ。バランスを保つには、動き続けなければならない。",
                    None,
                ),
            ],
            "ニュートン": [
                (
                    "If I have seen further it is by standing on the shoulders of Giants.",
                    "私がさらに遠くを見ることができたのは、巨人の肩の上に立っていたからだ。",
                    None,
                ),
            ],
        },
        "政治家": {
            "ガンディー": [
                (
                    "Be the change that you wish to see in the world.",
                    "世界に望む変化に、あなた自身がなりなさい。",
                    None,
                ),
                (
                    "Live as if you were to die tomorrow. Learn as if you were to live forever.",
                    "明日死ぬかのように生きよ。永遠に生きるかのように学べ。",
                    None,
                ),
            ],
            "リンカーン": [
                (
                    "Whatever you are, be a good one.",
                    "何であれ、良いものであれ。",
                    None,
                ),
            ],
        },
    },
    "映画": {
        "ドラマ": {
            "フォレスト・ガンプ": [
                (
                    "Life is like a box of chocolates. You never know what you're gonna get.",
                    "人生はチョコレートの箱のようなもの。開けてみるまで中身はわからない。",
                    None,
                ),
            ],
        },
    },
    "ビジネス": {
        "起業家": {
            "スティーブ・ジョブズ": [
                (
                    "Stay hungry, stay foolish.",
                    "ハングリーであれ。愚か者であれ。",
                    "2005年のスタンフォード大学卒業式でのスピーチより。",
                ),
            ],
        },
    },
    "スポーツ": {
        "バスケットボール": {
            "マイケル・ジョーダン": [
                (
                    "I've failed over and over and over again in my life. "
                    "And that is why I succeed.",
                    "私は人生で何度も何度も失敗してきた。だからこそ成功した。",
                    None,
                ),
            ],
        },
    },
}
